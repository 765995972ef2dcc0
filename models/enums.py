from enum import Enum


class Sw360Visibility(Enum):
    PRIVATE = "PRIVATE"
    ME_AND_MODERATORS = "ME_AND_MODERATORS"
    BUISNESSUNIT_AND_MODERATORS = "BUISNESSUNIT_AND_MODERATORS"
    EVERYONE = "EVERYONE"


class Sw360AttachmentType(Enum):
    DOCUMENT = "DOCUMENT"
    SOURCE = "SOURCE"
    DESIGN = "DESIGN"
    REQUIREMENT = "REQUIREMENT"
    CLEARING_REPORT = "CLEARING_REPORT"
    COMPONENT_LICENSE_INFO_XML = "COMPONENT_LICENSE_INFO_XML"
    COMPONENT_LICENSE_INFO_COMBINED = "COMPONENT_LICENSE_INFO_COMBINED"
    SCAN_RESULT_REPORT = "SCAN_RESULT_REPORT"
    SCAN_RESULT_REPORT_XML = "SCAN_RESULT_REPORT_XML"
    SOURCE_SELF = "SOURCE_SELF"
    BINARY = "BINARY"
    BINARY_SELF = "BINARY_SELF"
    DECISION_REPORT = "DECISION_REPORT"
    LEGAL_EVALUATION = "LEGAL_EVALUATION"
    LICENSE_AGREEMENT = "LICENSE_AGREEMENT"
    SCREENSHOT = "SCREENSHOT"
    OTHER = "OTHER"
    README_OSS = "README_OSS"


class Sw360ReleaseRelationship(Enum):
    CONTAINED = "CONTAINED"
    REFERRED = "REFERRED"
    UNKNOWN = "UNKNOWN"
    DYNAMICALLY_LINKED = "DYNAMICALLY_LINKED"
    STATICALLY_LINKED = "STATICALLY_LINKED"
    SIDE_BY_SIDE = "SIDE_BY_SIDE"
    STANDALONE = "STANDALONE"
    INTERNAL_USE = "INTERNAL_USE"
    OPTIONAL = "OPTIONAL"
    TO_BE_REPLACED = "TO_BE_REPLACED"
    CODE_SNIPPET = "CODE_SNIPPET"


class Sw360MainlineState(Enum):
    OPEN = "OPEN"
    MAINLINE = "MAINLINE"
    SPECIFIC = "SPECIFIC"
    PHASEOUT = "PHASEOUT"
    DENIED = "DENIED"


# Media types sent with each attachment type the license report uploads.
ATTACHMENT_MEDIA_TYPES = {
    Sw360AttachmentType.SOURCE: "application/zip",
    Sw360AttachmentType.COMPONENT_LICENSE_INFO_XML: "application/xml",
    Sw360AttachmentType.DOCUMENT: "text/plain",
}
