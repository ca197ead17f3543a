"""Per-field trim settings, persisted as JSON."""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

logger = logging.getLogger(__name__)

TRIM_TYPES = ("chars", "words")
SUMMARY_HANDLERS = ("full", "trim", "ignore")

_BOOL_FIELDS = {"more_link", "strip_html"}
_STR_FIELDS = ("trim_type", "trim_suffix", "more_text", "summary_handler")


class InvalidSettingsError(ValueError):
    """Raised when a settings value is out of range or unknown."""


def _to_bool(value) -> bool:
    # Form posts send "0"/"1"
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no", "off")
    return bool(value)


@dataclass
class TrimSettings:
    """How one field is trimmed and decorated for display."""

    trim_length: int = 600
    trim_type: str = "chars"  # chars | words
    trim_suffix: str = ""

    # "Read more" link to the full entity
    more_link: bool = False
    more_text: str = ""

    # full   = use summary if present, and do not trim
    # trim   = use summary if present, honor trim settings
    # ignore = do not use summary
    summary_handler: str = "full"

    # Strip tags and collapse whitespace before trimming
    strip_html: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.trim_length, int) or isinstance(self.trim_length, bool):
            raise InvalidSettingsError(
                f"trim_length must be an integer, got {self.trim_length!r}"
            )
        for name in _STR_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise InvalidSettingsError(f"{name} must be a string, got {value!r}")
        if self.trim_length < 0:
            raise InvalidSettingsError(
                f"trim_length must be >= 0, got {self.trim_length}"
            )
        if self.trim_type not in TRIM_TYPES:
            raise InvalidSettingsError(f"Unknown trim_type: {self.trim_type!r}")
        if self.summary_handler not in SUMMARY_HANDLERS:
            raise InvalidSettingsError(
                f"Unknown summary_handler: {self.summary_handler!r}"
            )

    def summary(self) -> str:
        """One-line description, e.g. ``"300 words with suffix, with more link"``."""
        unit = "characters" if self.trim_type == "chars" else "words"
        text = f"{self.trim_length} {unit}"
        if self.trim_suffix.strip():
            text += " with suffix"
        if self.more_link:
            text += ", with more link"
        return text

    @classmethod
    def from_dict(cls, raw: dict) -> "TrimSettings":
        """Build settings from loosely typed input (form posts, JSON).

        Unknown keys are ignored. Raises InvalidSettingsError on bad values.
        """
        known = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in raw.items() if k in known}
        if "trim_length" in filtered:
            try:
                filtered["trim_length"] = int(filtered["trim_length"])
            except (TypeError, ValueError) as e:
                raise InvalidSettingsError(
                    f"trim_length must be an integer, got {filtered['trim_length']!r}"
                ) from e
        for key in _BOOL_FIELDS & filtered.keys():
            filtered[key] = _to_bool(filtered[key])
        return cls(**filtered)

    @classmethod
    def load(cls, path: Path) -> "TrimSettings":
        """Load from JSON file. Returns defaults if file doesn't exist."""
        if not path.exists():
            return cls()
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return cls.from_dict(raw)
        except (json.JSONDecodeError, AttributeError, InvalidSettingsError) as e:
            logger.warning("Corrupt settings file %s, using defaults: %s", path, e)
            return cls()

    def save(self, path: Path) -> None:
        """Persist to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(asdict(self), ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
