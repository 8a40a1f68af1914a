from __future__ import annotations

import csv
import io

from ..common.datetime_utils import format_date
from ..core.constants import CSV_HEADER
from .model import Ledger


def export_csv(ledger: Ledger) -> str:
    """Serialize the whole ledger as ``Date,Time`` rows in ledger order.

    Rows are joined with ``\\n`` and the blob carries no trailing newline.
    """

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n", quoting=csv.QUOTE_NONE)
    writer.writerow(CSV_HEADER)
    for record in ledger:
        writer.writerow((format_date(record.date), record.time))
    return out.getvalue().rstrip("\n")
