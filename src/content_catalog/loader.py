"""Loading of content snapshots from files and remote URLs.

Remote snapshots (e.g. a JSON export of the CMS space) are downloaded with
protections against malicious content:

- URL validation via domain allowlist and SSRF checks
- Response size cap to prevent memory exhaustion
- JSON structure validation before the Pydantic model is built
- Entity count ceiling to reject implausibly large payloads
- Connection and read timeouts
"""

import ipaddress
import json
import logging
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import requests
import yaml
from pydantic import ValidationError

from .exceptions import SnapshotLoadError
from .schema import ContentSnapshot

logger = logging.getLogger(__name__)

# ── Limits ──────────────────────────────────────────────────────────────────
MAX_SNAPSHOT_BYTES = 20 * 1024 * 1024  # 20 MB
MAX_ENTITY_COUNT = 5000  # per collection
REQUEST_TIMEOUT = (10, 30)  # (connect, read) seconds

ENTITY_COLLECTIONS = (
    ("reasons", "reasons"),
    ("solutions", "solutions"),
    ("governance_models", "governanceModels"),
    ("implementation_variations", "implementationVariations"),
)

# Suffix matching: "images.ctfassets.net" matches "ctfassets.net".
SNAPSHOT_ALLOWED_DOMAINS = frozenset([
    "contentful.com",
    "ctfassets.net",
    "githubusercontent.com",
    "raw.githubusercontent.com",
])

BLOCKED_IP_RANGES = [
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("127.0.0.0/8"),
    ipaddress.ip_network("169.254.0.0/16"),  # Link-local
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fc00::/7"),
    ipaddress.ip_network("fe80::/10"),
]

BLOCKED_HOSTNAMES = frozenset([
    "metadata.google.internal",
    "metadata.goog",
    "169.254.169.254",
    "100.100.100.200",
])


def load_snapshot(path: Union[str, Path]) -> ContentSnapshot:
    """Load a content snapshot from a JSON or YAML file.

    Raises:
        SnapshotLoadError: When the file is missing, unparseable or invalid.
    """
    path = Path(path)
    if not path.exists():
        raise SnapshotLoadError(f"Snapshot file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotLoadError(f"Could not read snapshot {path}: {exc}")

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SnapshotLoadError(f"Snapshot {path} could not be parsed: {exc}")

    snapshot = parse_snapshot(data)
    logger.info(
        "Loaded snapshot %s: %d reasons, %d solutions, %d governance models, %d variations",
        path,
        len(snapshot.reasons),
        len(snapshot.solutions),
        len(snapshot.governance_models),
        len(snapshot.implementation_variations),
    )
    return snapshot


def parse_snapshot(data: object) -> ContentSnapshot:
    """Validate raw snapshot data and build the snapshot model."""
    _validate_snapshot_structure(data)
    try:
        return ContentSnapshot.model_validate(data)
    except ValidationError as exc:
        raise SnapshotLoadError(f"Snapshot failed schema validation: {exc}")


def save_snapshot(snapshot: ContentSnapshot, path: Union[str, Path]) -> None:
    """Write a snapshot as JSON using the content (camelCase) field names."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = snapshot.model_dump(mode="json", by_alias=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def validate_snapshot(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Check a snapshot file for structural and referential problems.

    Returns:
        Tuple of (is_valid, issues). Referential problems (dangling
        references, unknown identifiers) are reported as issues but only
        structural problems make the snapshot invalid.
    """
    try:
        snapshot = load_snapshot(path)
    except SnapshotLoadError as exc:
        return False, [str(exc)]

    return True, find_reference_issues(snapshot)


def find_reference_issues(snapshot: ContentSnapshot) -> list[str]:
    """List referential inconsistencies in a snapshot."""
    issues = []

    for collection, _ in ENTITY_COLLECTIONS:
        seen: set[str] = set()
        for entity in getattr(snapshot, collection):
            if entity.id in seen:
                issues.append(f"Duplicate id in {collection}: {entity.id}")
            seen.add(entity.id)

    solution_ids = {s.id for s in snapshot.solutions}
    model_ids = {m.id for m in snapshot.governance_models}

    for variation in snapshot.implementation_variations:
        if variation.mobiliteitsdienst_variant_id not in solution_ids:
            issues.append(
                f"Variation {variation.id} belongs to unknown solution "
                f"{variation.mobiliteitsdienst_variant_id}"
            )
        for list_name in ("governance_models", "governance_models_mits", "governance_models_nietgeschikt"):
            for link in getattr(variation, list_name):
                if link.id not in model_ids:
                    issues.append(
                        f"Variation {variation.id} references unknown governance model "
                        f"{link.id} in {list_name}"
                    )

    for solution in snapshot.solutions:
        for model_id in solution.governance_model_ids:
            if model_id not in model_ids:
                issues.append(f"Solution {solution.id} references unknown governance model {model_id}")

    score_fields: set[str] = set()
    for solution in snapshot.solutions:
        score_fields.update(solution.numeric_attributes())
    for reason in snapshot.reasons:
        if reason.identifier and reason.identifier not in score_fields \
                and reason.identifier.lower() not in score_fields:
            issues.append(
                f"Reason {reason.id} identifier '{reason.identifier}' matches no solution score field"
            )

    return issues


# =============================================================================
# Remote snapshots
# =============================================================================


def _is_ip_blocked(hostname: str) -> bool:
    """Check if a hostname is a literal IP in a blocked range."""
    try:
        ip = ipaddress.ip_address(hostname)
        return any(ip in network for network in BLOCKED_IP_RANGES)
    except ValueError:
        return False


def _validate_snapshot_url(
    url: str,
    allowed_domains: frozenset[str],
) -> tuple[bool, str]:
    """Validate a snapshot URL with subdomain-aware allowlist matching."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False, "Invalid URL format"

    if parsed.scheme.lower() != "https":
        return False, "URL scheme must be HTTPS"

    if not parsed.netloc:
        return False, "URL must have a hostname"

    hostname = (parsed.hostname or "").lower()

    if hostname in BLOCKED_HOSTNAMES:
        return False, "URL hostname is blocked"

    if _is_ip_blocked(hostname):
        return False, "URL points to a private/internal IP address"

    for domain in allowed_domains:
        if hostname == domain or hostname.endswith("." + domain):
            return True, ""

    return False, f"URL domain '{hostname}' is not in the allowed list"


def fetch_remote_snapshot(
    url: str,
    *,
    allowed_domains: Optional[frozenset[str]] = None,
    headers: Optional[dict[str, str]] = None,
) -> ContentSnapshot:
    """Download and validate a remote content snapshot.

    Args:
        url: HTTPS URL pointing to a snapshot JSON file.
        allowed_domains: Override the domain allowlist (mainly for testing).
        headers: Extra request headers, e.g. an Authorization header.

    Raises:
        SnapshotLoadError: On any validation or network failure.
    """
    domains = allowed_domains or SNAPSHOT_ALLOWED_DOMAINS

    valid, err = _validate_snapshot_url(url, domains)
    if not valid:
        raise SnapshotLoadError(f"Invalid URL: {err}")

    request_headers = {"Accept": "application/json"}
    if headers:
        request_headers.update(headers)

    try:
        resp = requests.get(
            url,
            timeout=REQUEST_TIMEOUT,
            stream=True,
            headers=request_headers,
            allow_redirects=False,
        )
    except requests.ConnectionError:
        raise SnapshotLoadError("Could not connect to the snapshot URL.")
    except requests.Timeout:
        raise SnapshotLoadError("Request timed out while downloading the snapshot.")
    except requests.RequestException as exc:
        raise SnapshotLoadError(f"Network error: {exc}")

    if resp.status_code in (301, 302, 307, 308):
        raise SnapshotLoadError(
            "The URL returned a redirect. Please use the direct URL to the snapshot file."
        )

    if resp.status_code in (401, 403):
        raise SnapshotLoadError(
            f"Server returned HTTP {resp.status_code}. Check the access token for the content space."
        )

    if resp.status_code != 200:
        raise SnapshotLoadError(
            f"Server returned HTTP {resp.status_code}. "
            "Check that the URL is correct and the resource is accessible."
        )

    content_type = resp.headers.get("Content-Type", "")
    if content_type and "json" not in content_type and "octet-stream" not in content_type:
        raise SnapshotLoadError(
            f"Unexpected Content-Type '{content_type}'. Expected a JSON file."
        )

    chunks: list[bytes] = []
    received = 0
    for chunk in resp.iter_content(chunk_size=64 * 1024):
        received += len(chunk)
        if received > MAX_SNAPSHOT_BYTES:
            raise SnapshotLoadError(
                f"Snapshot exceeds the maximum allowed size of "
                f"{MAX_SNAPSHOT_BYTES // (1024 * 1024)} MB."
            )
        chunks.append(chunk)

    raw = b"".join(chunks)
    if not raw:
        raise SnapshotLoadError("Downloaded file is empty.")

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SnapshotLoadError(f"Downloaded file is not valid JSON: {exc}")

    snapshot = parse_snapshot(data)
    logger.info("Remote snapshot loaded from %s", url)
    return snapshot


def _validate_snapshot_structure(data: object) -> None:
    """Validate the essential shape of a snapshot.

    Checks performed:
    - Top level is a JSON object
    - Every present entity collection is an array of objects
    - Every entity has an ``id``
    - No collection exceeds MAX_ENTITY_COUNT
    - At least one entity collection is present
    """
    if not isinstance(data, dict):
        raise SnapshotLoadError("Snapshot must be a JSON object.")

    present = 0
    for field_name, alias in ENTITY_COLLECTIONS:
        key = field_name if field_name in data else alias
        if key not in data:
            continue
        present += 1
        entities = data[key]
        if not isinstance(entities, list):
            raise SnapshotLoadError(f"'{key}' must be a JSON array.")
        if len(entities) > MAX_ENTITY_COUNT:
            raise SnapshotLoadError(
                f"'{key}' has {len(entities)} entries, which exceeds the maximum of {MAX_ENTITY_COUNT}."
            )
        for i, entity in enumerate(entities):
            if not isinstance(entity, dict):
                raise SnapshotLoadError(f"Entry {i} in '{key}' is not a JSON object.")
            if not entity.get("id"):
                raise SnapshotLoadError(f"Entry {i} in '{key}' is missing its 'id'.")

    if present == 0:
        raise SnapshotLoadError(
            "Snapshot contains no entity collections "
            "(expected reasons, solutions, governanceModels or implementationVariations)."
        )
