"""Region helpers for redirect handling and endpoint selection."""

DEFAULT_REGION = "us-east-1"

_REGION_ALIASES = {
    "": DEFAULT_REGION,
    "us": DEFAULT_REGION,
    "external-1": DEFAULT_REGION,
    "eu": "eu-west-1",
}


def region_of_string(value: str) -> str:
    """Normalize a region name as reported by the service."""
    region = value.strip().lower()
    return _REGION_ALIASES.get(region, region)


def _is_s3_label(label: str) -> bool:
    return label == "s3" or label.startswith("s3-")


def region_of_host(host: str) -> str:
    """Derive the region from an S3 endpoint host name.

    Handles the legacy dash form (``bucket.s3-eu-west-1.amazonaws.com``), the
    dotted form (``bucket.s3.eu-west-1.amazonaws.com``), dualstack hosts, and
    the global endpoint, which maps to us-east-1. Labels are read from the
    right so a bucket name containing ``s3`` labels is never taken for the
    region.
    """
    labels = host.strip().lower().rstrip(".").split(".")
    if "amazonaws" in labels:
        labels = labels[: len(labels) - labels[::-1].index("amazonaws") - 1]

    for index in range(len(labels) - 1, -1, -1):
        label = labels[index]
        if not _is_s3_label(label):
            continue
        if label != "s3":
            return region_of_string(label[3:])
        rest = [part for part in labels[index + 1 :] if part != "dualstack"]
        return region_of_string(rest[0]) if rest else DEFAULT_REGION
    return DEFAULT_REGION


def endpoint_for_region(region: str) -> str:
    """Return the path-style endpoint URL for a region."""
    if region == DEFAULT_REGION:
        return "https://s3.amazonaws.com"
    return f"https://s3.{region}.amazonaws.com"
