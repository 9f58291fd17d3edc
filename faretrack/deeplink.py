"""Google Flights deep links.

The ``tfs`` query parameter is a URL-safe base64 blob of length-prefixed tagged fields:

    header  08 1c 10 02
    leg     1a <len> [ 12 <len> date ][ 6a <len> place(origin) ][ 72 <len> place(destination) ]
    leg     same, return date, origin and destination swapped
    trailer static flags

    place   08 <type code> 12 <len> <place id>

Every length is a single byte, so no field content may exceed 255 bytes.
"""
import base64
from dataclasses import dataclass
from datetime import date
from urllib.parse import urlencode

BASE_URL = 'https://www.google.com/travel/flights/search'
QUERY_EXTRAS = {'hl': 'en', 'curr': 'USD'}

HEADER = bytes([0x08, 0x1c, 0x10, 0x02])
TRAILER = bytes([
    0x40, 0x01, 0x48, 0x01, 0x70, 0x01, 0x82, 0x01, 0x0b,
    0x08, 0xff, 0xff, 0xff, 0xff, 0xff, 0xff, 0xff, 0xff, 0xff, 0x01, 0x98, 0x01, 0x01,
])

LEG_TAG = 0x1a
DATE_TAG = 0x12
ORIGIN_TAG = 0x6a
DESTINATION_TAG = 0x72
PLACE_TYPE_TAG = 0x08
PLACE_ID_TAG = 0x12

MAX_FIELD_LENGTH = 0xff


class DeepLinkError(ValueError):
    pass


class UnknownOriginError(DeepLinkError):
    pass


class FieldTooLongError(DeepLinkError):
    pass


class InvalidSearchError(DeepLinkError):
    pass


@dataclass(frozen=True, slots=True)
class Place:
    """Knowledge-graph place id plus its type code (2 = airport city, 3 = city / metro area)."""
    place_id: str
    type_code: int


ORIGINS: dict[str, Place] = {
    'SLC': Place('/m/0f2r6', 2),
    'PVU': Place('/m/0l39b', 3),
}
DESTINATION = Place('/m/0ply0', 3)  # Orlando (MCO area)


# ---------------- field encoders -----------------
def tagged_field(tag: int, content: bytes) -> bytes:
    if len(content) > MAX_FIELD_LENGTH:
        raise FieldTooLongError(f"Field 0x{tag:02x} has {len(content)} bytes, limit is {MAX_FIELD_LENGTH}")
    return bytes([tag, len(content)]) + content


def date_field(day: str) -> bytes:
    return tagged_field(DATE_TAG, day.encode('utf-8'))


def place_field(tag: int, place: Place) -> bytes:
    if not 0 <= place.type_code <= 0xff:
        raise FieldTooLongError(f"Place type code {place.type_code} does not fit in one byte")
    inner = bytes([PLACE_TYPE_TAG, place.type_code]) + tagged_field(PLACE_ID_TAG, place.place_id.encode('utf-8'))
    return tagged_field(tag, inner)


def leg_field(day: str, origin: Place, destination: Place) -> bytes:
    content = date_field(day) + place_field(ORIGIN_TAG, origin) + place_field(DESTINATION_TAG, destination)
    return tagged_field(LEG_TAG, content)


# ---------------- token -----------------
def _as_text(day: str | date) -> str:
    return day.isoformat() if isinstance(day, date) else day


def _origin_place(origin_key: str) -> Place:
    try:
        return ORIGINS[origin_key]
    except KeyError:
        raise UnknownOriginError(f"Unknown origin '{origin_key}', expected one of {sorted(ORIGINS)}") from None


def encode_search(depart: str | date, return_date: str | date, origin_key: str) -> bytes:
    origin = _origin_place(origin_key)
    return b''.join([
        HEADER,
        leg_field(_as_text(depart), origin, DESTINATION),
        leg_field(_as_text(return_date), DESTINATION, origin),
        TRAILER,
    ])


def encode_token(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode('ascii').rstrip('=')


def decode_token(token: str) -> bytes:
    return base64.urlsafe_b64decode(token + '=' * (-len(token) % 4))


def build_search_link(depart: str | date, return_date: str | date, origin_key: str) -> str:
    token = encode_token(encode_search(depart, return_date, origin_key))
    return f"{BASE_URL}?{urlencode({'tfs': token, **QUERY_EXTRAS})}"


def build_custom_search_link(depart: str | None, return_date: str | None, origin_key: str) -> str:
    """Link for a user-entered search. Both dates are required and the return must come after departure."""
    if not depart or not return_date:
        raise InvalidSearchError("Please select both dates.")
    try:
        depart_day = date.fromisoformat(depart)
        return_day = date.fromisoformat(return_date)
    except ValueError as e:
        raise InvalidSearchError(f"Dates must be YYYY-MM-DD: {e}") from e
    if return_day <= depart_day:
        raise InvalidSearchError("Return must be after departure.")
    return build_search_link(depart_day, return_day, origin_key)
