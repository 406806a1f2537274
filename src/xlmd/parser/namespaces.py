SPREADSHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
DOCUMENT_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PACKAGE_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
CONTENT_TYPES_NS = "http://schemas.openxmlformats.org/package/2006/content-types"
XML_NS = "http://www.w3.org/XML/1998/namespace"

NS = {
    "a": SPREADSHEET_NS,
    "r": DOCUMENT_REL_NS,
    "pr": PACKAGE_REL_NS,
}

REL_TYPE_OFFICE_DOCUMENT = f"{DOCUMENT_REL_NS}/officeDocument"
REL_TYPE_WORKSHEET = f"{DOCUMENT_REL_NS}/worksheet"
REL_TYPE_STYLES = f"{DOCUMENT_REL_NS}/styles"
REL_TYPE_SHARED_STRINGS = f"{DOCUMENT_REL_NS}/sharedStrings"

CT_RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"
CT_XML = "application/xml"
CT_WORKBOOK = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml"
CT_STYLES = "application/vnd.openxmlformats-officedocument.spreadsheetml.styles+xml"
CT_SHARED_STRINGS = "application/vnd.openxmlformats-officedocument.spreadsheetml.sharedStrings+xml"
CT_WORKSHEET = "application/vnd.openxmlformats-officedocument.spreadsheetml.worksheet+xml"
