# core/utils.py
"""
Small helpers shared by every app: date-key normalisation and money coercion.

Client payloads come from a browser front end and from records written by
older versions of the service, so dates arrive as plain keys, ISO timestamps
or JS-style strings (``toUTCString()``, ``toString()``, ``2024/01/05``), and
amounts arrive as numbers, strings or nothing.
"""
import logging
import re
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.utils import timezone
from django.utils.dateparse import parse_datetime
from django.utils.http import parse_http_date

logger = logging.getLogger(__name__)

DATE_KEY_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')
YMD_SLASH_RE = re.compile(r'^(\d{4})/(\d{1,2})/(\d{1,2})$')
MDY_SLASH_RE = re.compile(r'^(\d{1,2})/(\d{1,2})/(\d{4})$')
# Date.prototype.toString(): "Fri Jan 05 2024 00:30:00 GMT+0600 (Bangladesh Standard Time)"
JS_DATE_STRING_RE = re.compile(
    r'^[A-Za-z]{3} ([A-Za-z]{3} \d{1,2} \d{4} \d{2}:\d{2}:\d{2}) GMT([+-]\d{4})(?: \(.*\))?$'
)
TWO_PLACES = Decimal('0.01')
ZERO = Decimal('0')
# money columns are DecimalField(max_digits=12, decimal_places=2)
MONEY_LIMIT = Decimal('1e10')


def _local_day(moment):
    if timezone.is_aware(moment):
        moment = timezone.localtime(moment)
    return moment.date()


def _calendar_day(year, month, day):
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def parse_date_key(value):
    """
    Return the local calendar ``date`` for a client supplied date, or None.

    - ``YYYY-MM-DD``, ``YYYY/MM/DD`` and ``MM/DD/YYYY`` strings are calendar
      days already (after checking the day exists).
    - Timestamps with an offset (ISO, HTTP/``toUTCString()`` and JS
      ``toString()`` forms) are converted to the configured TIME_ZONE first,
      so ``2024-01-04T18:30:00Z`` is the 5th in Dhaka, not the 4th.
    - Naive timestamps are already local.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return _local_day(value)
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if DATE_KEY_RE.match(text):
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None

    match = YMD_SLASH_RE.match(text)
    if match:
        return _calendar_day(*match.groups())
    match = MDY_SLASH_RE.match(text)
    if match:
        month, day, year = match.groups()
        return _calendar_day(year, month, day)

    match = JS_DATE_STRING_RE.match(text)
    if match:
        try:
            parsed = datetime.strptime(' '.join(match.groups()), '%b %d %Y %H:%M:%S %z')
        except ValueError:
            return None
        return _local_day(parsed)

    try:
        seconds = parse_http_date(text)
    except ValueError:
        pass
    else:
        return _local_day(datetime.fromtimestamp(seconds, tz=dt_timezone.utc))

    try:
        parsed = parse_datetime(text.replace('Z', '+00:00') if text.endswith('Z') else text)
    except ValueError:
        parsed = None
    if parsed is None:
        return None
    return _local_day(parsed)


def to_date_key(value):
    """Canonical ``YYYY-MM-DD`` key for ``value``; empty string when unparseable."""
    parsed = parse_date_key(value)
    return parsed.isoformat() if parsed else ''


def parse_amount(value):
    """The finite Decimal ``value`` spells, or None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            amount = Decimal(text)
        except (InvalidOperation, ValueError):
            return None
    return amount if amount.is_finite() else None


def exceeds_money_range(value):
    """True for a number too large for a money column (2 places, 12 digits)."""
    amount = parse_amount(value)
    return amount is not None and abs(amount) >= MONEY_LIMIT


def to_money(value):
    """
    Coerce a loosely typed amount to Decimal.

    Missing, blank, boolean, non-numeric, non-finite and out-of-range values
    count as 0; bad data must never block a running balance.
    """
    amount = parse_amount(value)
    if amount is None:
        if not (value is None or isinstance(value, bool) or not str(value).strip()):
            logger.warning(f"Non-numeric amount {value!r} treated as 0")
        return ZERO
    if abs(amount) >= MONEY_LIMIT:
        logger.warning(f"Out-of-range amount {value!r} treated as 0")
        return ZERO
    return amount


def round_money(value):
    """Quantise to two places, half up (150.555 -> 150.56)."""
    amount = value if isinstance(value, Decimal) and value.is_finite() else to_money(value)
    try:
        return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.warning(f"Amount {value!r} cannot be rounded to cents; treated as 0")
        return ZERO.quantize(TWO_PLACES)
