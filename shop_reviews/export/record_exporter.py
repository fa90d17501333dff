"""
Record Exporter

Writes ranked ShopReviewRecord lists to JSON and CSV.

Column names match the files produced by earlier versions of the tool
(ProductUrl, ProductName, SalesCount, Currency, Price, ProductImage) so
existing spreadsheets keep working.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from ..models import ShopReviewRecord

logger = logging.getLogger(__name__)

FIELDNAMES = ['ProductUrl', 'ProductName', 'SalesCount', 'Currency', 'Price', 'ProductImage']

DEFAULT_JSON_FILENAME = 'shop_reviews.json'
DEFAULT_CSV_FILENAME = 'shop_reviews.csv'

EXPORT_FORMATS = ('json', 'csv', 'both')


def record_to_row(record: ShopReviewRecord) -> Dict[str, Optional[Union[str, int]]]:
    """Convert a record to an export row. Absent enrichment fields stay None."""
    return {
        'ProductUrl': record.product_url,
        'ProductName': record.product_name,
        'SalesCount': record.occurrence_count,
        'Currency': record.currency,
        'Price': record.price_amount,
        'ProductImage': record.image_url,
    }


def export_json(records: Iterable[ShopReviewRecord], file_path: Union[str, Path]) -> int:
    """
    Write records as an indented JSON array.

    Args:
        records: Ranked records
        file_path: Output path

    Returns:
        Number of records written
    """
    rows = [record_to_row(r) for r in records]
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(rows, f, indent=2, ensure_ascii=False)
    logger.info("Saved %d records to %s", len(rows), file_path)
    return len(rows)


def export_csv(records: Iterable[ShopReviewRecord], file_path: Union[str, Path]) -> int:
    """
    Write records as CSV with a header row.

    The header is written even when there are no records.

    Args:
        records: Ranked records
        file_path: Output path

    Returns:
        Number of data rows written
    """
    rows = [record_to_row(r) for r in records]
    with open(file_path, 'w', encoding='utf-8', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for row in rows:
            writer.writerow({k: ('' if v is None else v) for k, v in row.items()})
    logger.info("Saved %d records to %s", len(rows), file_path)
    return len(rows)


def export_records(
    records: List[ShopReviewRecord],
    fmt: str,
    output_dir: Union[str, Path] = '.',
) -> List[Path]:
    """
    Export records in the chosen format(s).

    Args:
        records: Ranked records
        fmt: 'json', 'csv' or 'both'
        output_dir: Directory for shop_reviews.json / shop_reviews.csv

    Returns:
        Paths of the files written

    Raises:
        ValueError: If fmt is not a supported format
    """
    fmt = fmt.lower().strip()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported format: {fmt}. Supported: {', '.join(EXPORT_FORMATS)}")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    if fmt in ('json', 'both'):
        path = output_dir / DEFAULT_JSON_FILENAME
        export_json(records, path)
        written.append(path)
    if fmt in ('csv', 'both'):
        path = output_dir / DEFAULT_CSV_FILENAME
        export_csv(records, path)
        written.append(path)
    return written
