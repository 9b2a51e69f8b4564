"""URL feature extraction - protocol, domain form, path depth, query and fragment."""

import logging
import re
from urllib.parse import urlparse

from seoscore.constants import ROOT_DOMAIN_LABELS, SUBDOMAIN_LABELS, WWW_LABEL
from seoscore.errors import InvalidUrlError
from seoscore.models import DomainForm, UrlFeatures

logger = logging.getLogger(__name__)

_SUPPORTED_SCHEMES = ("http://", "https://")

# Hostname characters accepted by browsers' URL parsers (IPv6 literals aside)
_HOSTNAME_PATTERN = re.compile(r"^[A-Za-z0-9\-._~%!$&'()*+,;=]+$")


def normalize_url(url: str) -> str:
    """Prepend ``https://`` when the string has no http(s) scheme."""
    url = url.strip()
    if not url.lower().startswith(_SUPPORTED_SCHEMES):
        return f"https://{url}"
    return url


def is_valid_url(url: str) -> bool:
    """Check that the normalized string parses as an absolute URL with a host."""
    if not url or not url.strip():
        return False

    try:
        parsed = urlparse(normalize_url(url))
        hostname = parsed.hostname
        parsed.port  # raises ValueError for malformed ports
    except ValueError:
        return False

    if not hostname:
        return False

    if parsed.netloc.startswith("["):
        # IPv6 literal, already validated by urlparse
        return True

    return bool(_HOSTNAME_PATTERN.match(hostname))


def classify_domain(hostname: str) -> DomainForm:
    """Classify a hostname by its number of dot-separated labels.

    Args:
        hostname: Hostname without scheme or port

    Returns:
        DomainForm for the hostname
    """
    labels = hostname.split(".")

    if len(labels) == ROOT_DOMAIN_LABELS:
        return DomainForm.ROOT
    if len(labels) == SUBDOMAIN_LABELS and labels[0] == WWW_LABEL:
        return DomainForm.WWW_SUBDOMAIN
    if len(labels) == SUBDOMAIN_LABELS:
        return DomainForm.SUBDOMAIN
    if len(labels) > SUBDOMAIN_LABELS:
        return DomainForm.MULTI_LEVEL_SUBDOMAIN
    return DomainForm.OTHER


def path_depth(path: str) -> int:
    """Count the non-empty ``/``-separated segments of a path."""
    return len([segment for segment in path.split("/") if segment])


def extract_url_features(url: str) -> UrlFeatures:
    """Derive structural facts from a URL without any network I/O.

    Args:
        url: URL string, with or without a protocol

    Returns:
        UrlFeatures for the normalized URL

    Raises:
        InvalidUrlError: If the normalized string is not an absolute URL
    """
    if not is_valid_url(url):
        raise InvalidUrlError(f"Invalid URL format: {url}", url=url)

    normalized = normalize_url(url)
    parsed = urlparse(normalized)
    hostname = parsed.hostname or ""

    features = UrlFeatures(
        url=normalized,
        https_protocol=parsed.scheme == "https",
        domain_has_www=hostname.startswith(f"{WWW_LABEL}."),
        domain_structure=classify_domain(hostname),
        path_depth=path_depth(parsed.path),
        has_query_params=bool(parsed.query),
        has_fragment=bool(parsed.fragment),
    )

    logger.debug(f"URL features for {normalized}: {features}")
    return features
