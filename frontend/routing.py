"""Inbound request parsing.

Splits a content URL into path, locale, format and variant:

    /government/news/some-item                -> path only
    /government/news/some-item.es             -> locale "es"
    /government/news/some-item.atom           -> format "atom"
    /government/news/some-item.es.atom        -> locale "es", format "atom"
    /foreign-travel-advice/albania/print      -> variant "print"

A trailing ``/print`` is always the print variant, so a part whose slug is
``print`` cannot be addressed by its own URL. Its content still appears on
the print page.
"""

from typing import Iterable, Mapping, NamedTuple, Optional

from frontend.content.fetcher import normalize_base_path
from frontend.content.schemas import RequestDescriptor
from frontend.experiments.dispatcher import header_for
from frontend.negotiation import parse_accept
from frontend.strategies.schemas import VARIANT_FORMATS

# Extensions treated as an explicit format request; unsupported ones end in a 406
FORMAT_EXTENSIONS = frozenset({"html", "atom", "json", "xml", "js", "rss"})

SCRIPT_REQUEST_MARKER = "xmlhttprequest"


class ContentPath(NamedTuple):
    path: str
    locale: Optional[str] = None
    format: Optional[str] = None
    variant: Optional[str] = None


def _split_extension(path: str) -> tuple[str, Optional[str]]:
    head, slash, last = path.rpartition("/")
    stem, dot, extension = last.rpartition(".")
    if not dot or not stem:
        return path, None
    return f"{head}{slash}{stem}", extension


def parse_content_path(raw_path: str, locales: Iterable[str]) -> ContentPath:
    """Parse an already percent-decoded request path."""
    path = normalize_base_path(raw_path).lstrip("/")
    known_locales = set(locales)

    variant = None
    head, _, last = path.rpartition("/")
    if head and last in VARIANT_FORMATS:
        path, variant = head, last

    format_name = None
    stem, extension = _split_extension(path)
    if extension in FORMAT_EXTENSIONS:
        path, format_name = stem, extension

    locale = None
    stem, extension = _split_extension(path)
    if extension in known_locales:
        path, locale = stem, extension

    return ContentPath(path=path, locale=locale, format=format_name, variant=variant)


def extract_assignments(headers: Mapping[str, str], experiments: Iterable[str]) -> dict[str, str]:
    """Read experiment arm assignments from ``GOVUK-ABTest-<name>`` headers."""
    assignments: dict[str, str] = {}
    for name in experiments:
        value = headers.get(header_for(name))
        if value:
            assignments[name] = value.strip()
    return assignments


def build_request_descriptor(
    raw_path: str,
    headers: Mapping[str, str],
    query: Mapping[str, str],
    locales: Iterable[str],
    default_locale: Optional[str] = None,
) -> RequestDescriptor:
    """Build the immutable RequestDescriptor for one inbound request.

    An explicit ``format`` or ``locale`` query parameter is used when the
    path carries none.
    """
    parsed = parse_content_path(raw_path, locales)
    locale = parsed.locale or query.get("locale") or None
    if locale == default_locale:
        locale = None

    return RequestDescriptor(
        path=parsed.path,
        format=parsed.format or query.get("format") or None,
        locale=locale,
        variant=parsed.variant or query.get("variant") or None,
        accept=parse_accept(headers.get("accept")),
        requested_via_script=(headers.get("x-requested-with") or "").lower() == SCRIPT_REQUEST_MARKER,
        query={k: v for k, v in query.items()},
    )
