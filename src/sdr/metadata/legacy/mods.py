"""Names used throughout the MODS (descMetadata) handling."""

from __future__ import annotations

MODS_NS = "http://www.loc.gov/mods/v3"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_NS = "http://www.w3.org/XML/1998/namespace"

NAMESPACES = {"mods": MODS_NS, "xsi": XSI_NS, "xlink": XLINK_NS}
NSMAP = {None: MODS_NS, "xsi": XSI_NS, "xlink": XLINK_NS}

SCHEMA_LOCATION_ATTR = f"{{{XSI_NS}}}schemaLocation"
XML_SPACE_ATTR = f"{{{XML_NS}}}space"
XML_LANG_ATTR = f"{{{XML_NS}}}lang"
XLINK_HREF_ATTR = f"{{{XLINK_NS}}}href"

PRIMARY = "primary"
PRIMARY_DISPLAY = "primary display"
GROUP_ATTRIBUTES = ("altRepGroup", "nameTitleGroup")


def q(tag: str) -> str:
    """Qualified MODS tag name."""
    return f"{{{MODS_NS}}}{tag}"


def local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def schema_location(version: str) -> str:
    dashed = version.replace(".", "-")
    return f"{MODS_NS} http://www.loc.gov/standards/mods/v3/mods-{dashed}.xsd"
