"""Read-only BIN table with longest-prefix lookup"""

import json
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from fintools_gateway.domain.models import BinRecord

SAMPLE_TABLE_PATH = Path(__file__).resolve().parents[1] / "data" / "bin_ranges.json"


class BinTable:
    """Static issuer ranges; the table is never mutated after construction"""

    def __init__(self, records: Iterable[BinRecord]):
        self._records = tuple(records)
        # Longer BINs are more specific, so they are tried first
        self._active = sorted(
            (r for r in self._records if r.active),
            key=lambda r: r.bin_length,
            reverse=True,
        )

    @classmethod
    def from_json(cls, path: Path | str | None = None) -> "BinTable":
        """Load records from a JSON array; defaults to the packaged sample table"""
        source = Path(path) if path else SAMPLE_TABLE_PATH
        raw = json.loads(source.read_text(encoding="utf-8"))
        return cls(
            BinRecord(
                bin=entry["bin"],
                bin_length=len(entry["bin"]),
                bank=entry["bank"],
                country=entry.get("country", "HR"),
                currency=entry.get("currency", "EUR"),
                card_network=entry["card_network"],
                card_category=entry["card_category"],
                valid_lengths=list(entry.get("valid_lengths", [16])),
                active=entry.get("active", True),
                bank_code=entry.get("bank_code"),
                card_tier=entry.get("card_tier"),
            )
            for entry in raw
        )

    def __len__(self) -> int:
        return len(self._records)

    def lookup(self, card_number: str) -> Optional[BinRecord]:
        """Most specific active record whose BIN prefixes the card number"""
        if len(card_number) < 6:
            return None
        for record in self._active:
            if card_number.startswith(record.bin):
                return record
        return None

    def banks(self) -> List[str]:
        return sorted({r.bank for r in self._active})

    def bins_for_bank(self, bank: str) -> List[BinRecord]:
        return [r for r in self._records if r.bank == bank and r.active]

    def statistics(self) -> Dict[str, object]:
        """Counts of active BINs per bank, network and category"""
        return {
            "total_banks": len({r.bank for r in self._active}),
            "total_bins": len(self._active),
            "card_networks": dict(Counter(r.card_network for r in self._active)),
            "card_categories": dict(Counter(r.card_category for r in self._active)),
        }
