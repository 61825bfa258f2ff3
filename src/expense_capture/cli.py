"""Command-line interface for expense capture."""

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click
from tqdm import tqdm

from .classify import CategoryClassifier, default_classifier
from .models import ParsedExpense
from .ocr import OCRError, OCRProcessor, EmptyImageError, UnsupportedImageFormatError
from .parse import ExpenseParser
from .receipt import ReceiptParser, parse_receipt_image
from .review import ReviewQueue
from .summary import PERIODS, format_currency, total_by_period, totals_by_category

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {'.txt', '.text'}


def _setup_logging(verbose: bool, debug: bool):
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger().setLevel(level)


def _format_expense(expense: ParsedExpense) -> str:
    flag = " [review]" if expense.needs_review else ""
    return (f"{format_currency(expense.amount):>12}  {expense.description:<30} "
            f"{expense.category.value:<14} {expense.confidence:.2f}{flag}")


def _echo_expenses(expenses: List[ParsedExpense]):
    for expense in expenses:
        click.echo(_format_expense(expense))


@click.group()
@click.option('--rules', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Path to category rules file (defaults to the bundled rules)')
@click.option('--verbose', '-v', is_flag=True, help='Show parsing progress logs')
@click.option('--debug', is_flag=True, help='Enable debug output')
@click.pass_context
def cli(ctx: click.Context, rules: Optional[Path], verbose: bool, debug: bool):
    """Expense capture - turn free text and receipts into categorized expenses."""
    _setup_logging(verbose, debug)
    ctx.ensure_object(dict)
    ctx.obj['classifier'] = CategoryClassifier(rules) if rules else default_classifier()


@cli.command()
@click.argument('text', nargs=-1, required=True)
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON')
@click.pass_context
def parse(ctx: click.Context, text: tuple, as_json: bool):
    """
    Parse a sentence describing one or more purchases.
    
    Example:
        expenses parse "Spent $45 on groceries and $12 uber"
    """
    parser = ExpenseParser(classifier=ctx.obj['classifier'])
    result = parser.parse(' '.join(text))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.succeeded:
        _echo_expenses(result.expenses)
    else:
        click.echo("No amounts found.")

    if not result.succeeded:
        ctx.exit(1)


@cli.command()
@click.argument('text', nargs=-1, required=True)
@click.pass_context
def category(ctx: click.Context, text: tuple):
    """Show the category detected for a piece of text."""
    match = ctx.obj['classifier'].detect_category(' '.join(text))
    click.echo(f"{match.category.value} ({match.confidence:.2f})")


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--lang', default='eng', help='Tesseract language for image receipts')
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON')
@click.pass_context
def receipt(ctx: click.Context, path: Path, lang: str, as_json: bool):
    """
    Interpret a receipt image, or a text file holding OCR output.
    
    Example:
        expenses receipt ./scans/walmart.jpg
    """
    classifier = ctx.obj['classifier']
    if path.suffix.lower() in TEXT_SUFFIXES:
        result = ReceiptParser(classifier=classifier).parse(path.read_text(encoding='utf-8'))
    else:
        try:
            result = parse_receipt_image(path, OCRProcessor(language=lang), classifier=classifier)
        except EmptyImageError:
            raise click.ClickException(f"{path.name} is empty - scan the receipt again.")
        except UnsupportedImageFormatError:
            raise click.ClickException(
                f"{path.name} is not a supported image format - use PNG, JPEG or TIFF.")
        except OCRError as e:
            raise click.ClickException(f"Could not read text from {path.name}: {e}")

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    _echo_expenses([result.expense])
    click.echo(f"Date: {result.expense.occurred_at.date().isoformat()}")
    if not result.expense.amount:
        click.echo("Warning: no amount found on this receipt.", err=True)


@cli.command()
@click.argument('input_file', type=click.File('r', encoding='utf-8'))
@click.option('--json', 'as_json', is_flag=True, help='Print all expenses as JSON')
@click.option('--period', type=click.Choice(PERIODS), default='all', show_default=True,
              help='Period the spending totals cover')
@click.pass_context
def batch(ctx: click.Context, input_file, as_json: bool, period: str):
    """
    Parse a file with one expense sentence per line.
    
    Example:
        expenses batch notes.txt --period week
    """
    lines = [line.strip() for line in input_file if line.strip()]
    parser = ExpenseParser(classifier=ctx.obj['classifier'])
    review_queue = ReviewQueue()
    expenses = []
    failed = []

    for line_no, line in enumerate(tqdm(lines, desc="Parsing expenses", disable=as_json or None), 1):
        result = parser.parse(line)
        if not result.succeeded:
            failed.append(line_no)
            continue
        for expense in result.expenses:
            expenses.append(expense)
            review_queue.add_expense(expense, source=f"line {line_no}", raw_text=line)

    category_totals = totals_by_category(expenses, period)
    period_total = total_by_period(expenses, period)

    if as_json:
        click.echo(json.dumps({
            'expenses': [expense.to_dict() for expense in expenses],
            'failed_lines': failed,
            'review': review_queue.get_summary(),
            'totals': {
                'period': period,
                'by_category': {cat.value: total for cat, total in category_totals.items()},
                'total': period_total,
            },
        }, indent=2))
        return

    _echo_expenses(expenses)

    click.echo("\n" + "=" * 50)
    click.echo("SUMMARY")
    click.echo("=" * 50)
    click.echo(f"Lines read: {len(lines)}")
    click.echo(f"Expenses found: {len(expenses)}")
    click.echo(f"Lines without amounts: {len(failed)}")
    click.echo(f"Totals ({period}):")
    for cat, total in category_totals.items():
        click.echo(f"  {cat.value:<14} {format_currency(total):>12}")
    click.echo(f"  {'total':<14} {format_currency(period_total):>12}")

    if review_queue.items:
        click.echo(f"\n{len(review_queue.items)} expense(s) need review:")
        for item in review_queue.items:
            click.echo(f"  - {item.source}: {item.suggested_description} ({item.reason})")


if __name__ == '__main__':
    cli()
