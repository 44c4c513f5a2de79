"""Hostname normalisation rules."""

# Labels used for DNS service records; such names never serve HTTPS.
SERVICE_LABELS = frozenset({"_dmarc", "_domainkey", "_acme-challenge", "_spf"})


def normalize_hostname(hostname: str) -> str | None:
    """
    Prepare a hostname for a certificate check.

    Wildcards are replaced by a concrete ``test`` label so that the
    handshake presents the wildcard certificate.

    Returns:
        The lower-cased hostname, or None if it should not be checked.
    """
    name = hostname.strip().lower().rstrip(".")
    if name.startswith("*."):
        name = f"test.{name[2:]}"

    labels = name.split(".")
    if len(labels) < 2 or not all(labels):
        return None
    if any(label in SERVICE_LABELS for label in labels):
        return None
    return name


def to_root_domain(hostname: str) -> str | None:
    """Reduce a hostname to the registrable domain used for WHOIS lookups."""
    name = hostname.strip().lower().rstrip(".")
    if name.startswith("*."):
        name = name[2:]

    labels = [label for label in name.split(".") if label]
    if len(labels) < 2:
        return None
    return ".".join(labels[-2:])
