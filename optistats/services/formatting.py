"""Number presentation shared by every card, chart and table."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class Formatter:
    """Encapsulate metric labels and display formatting.

    Currency uses two decimals, counts none, percentages one.
    """

    def __init__(
        self,
        labels: Optional[Mapping[str, str]] = None,
        currency_suffix: str = "zł",
        thousands_sep: str = " ",
        decimal_sep: str = ",",
    ):
        self.labels = dict(labels or {})
        self.currency_suffix = currency_suffix
        self.thousands_sep = thousands_sep
        self.decimal_sep = decimal_sep

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "Formatter":
        return cls(
            labels=config.get("METRIC_LABELS", {}),
            currency_suffix=config.get("CURRENCY_SUFFIX", "zł"),
            thousands_sep=config.get("THOUSANDS_SEP", " "),
            decimal_sep=config.get("DECIMAL_SEP", ","),
        )

    def label(self, key: Optional[str]) -> str:
        if not key:
            return ""
        return self.labels.get(key, key)

    def _localize(self, text: str) -> str:
        # text comes from format(..., ",.Nf"): "," groups, "." decimals
        return (
            text.replace(",", "\x00")
            .replace(".", self.decimal_sep)
            .replace("\x00", self.thousands_sep)
        )

    def number(self, value: Any, decimals: int = 0) -> str:
        try:
            amount = float(value or 0)
        except (TypeError, ValueError):
            amount = 0.0
        return self._localize(f"{amount:,.{decimals}f}")

    def currency(self, value: Any) -> str:
        text = self.number(value, decimals=2)
        return f"{text} {self.currency_suffix}" if self.currency_suffix else text

    def count(self, value: Any) -> str:
        return self.number(value, decimals=0)

    def percentage(self, value: Any) -> str:
        return f"{self.number(value, decimals=1)}%"

    def describe(self, key: str, value: Any, format_hint: str = "number") -> Dict[str, Any]:
        """Card payload: raw value plus its display string."""
        if format_hint == "currency":
            display = self.currency(value)
            raw = round(float(value or 0), 2)
        elif format_hint == "percentage":
            display = self.percentage(value)
            raw = float(value or 0)
        else:
            display = self.count(value)
            raw = value or 0
        return {
            "id": key,
            "label": self.label(key),
            "value": raw,
            "display": display,
            "format": format_hint,
        }


__all__ = ["Formatter"]
