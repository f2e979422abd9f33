"""Order type catalog and order attribute profiles.

Every file exchanged with the bank is tagged with an order type. The
catalog is fixed: each entry has a direction and the protocol code that
goes on the wire.
"""

from enum import Enum


class OrderDirection(str, Enum):
    """Direction of an order relative to the client."""

    UPLOAD = "upload"
    DOWNLOAD = "download"


class OrderAttribute(str, Enum):
    """Order attribute profile sent with a transfer request.

    OZHNN: signed order data, new file submission.
    DZHNN: download order, no signature.
    UZHNN: upload without electronic signature.
    """

    OZHNN = "OZHNN"
    DZHNN = "DZHNN"
    UZHNN = "UZHNN"


class OrderType(str, Enum):
    """Catalog of supported order types."""

    # Key management
    INI = "INI"
    HIA = "HIA"
    HPB = "HPB"
    SPR = "SPR"

    # Downloads
    STA = "STA"
    VMK = "VMK"
    C52 = "C52"
    C53 = "C53"
    C54 = "C54"
    C5N = "C5N"
    CIZ = "CIZ"
    ZDF = "ZDF"
    ZB6 = "ZB6"
    PTK = "PTK"
    HAC = "HAC"
    Z01 = "Z01"
    CRC = "CRC"
    CRJ = "CRJ"
    CRZ = "CRZ"
    HAA = "HAA"
    HTD = "HTD"

    # Uploads
    XKD = "XKD"
    FUL = "FUL"
    XCT = "XCT"
    XE2 = "XE2"
    CCT = "CCT"
    CIP = "CIP"

    @property
    def code(self) -> str:
        """Protocol code sent to the bank."""
        return self.value

    @property
    def direction(self) -> OrderDirection:
        return _DIRECTIONS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS.get(self, self.value)

    @property
    def is_key_management(self) -> bool:
        return self in KEY_MANAGEMENT_ORDERS

    @classmethod
    def downloads(cls) -> list["OrderType"]:
        """File download order types, in catalog order."""
        return [
            t
            for t in cls
            if t.direction is OrderDirection.DOWNLOAD and not t.is_key_management
        ]

    @classmethod
    def uploads(cls) -> list["OrderType"]:
        """File upload order types, in catalog order."""
        return [
            t
            for t in cls
            if t.direction is OrderDirection.UPLOAD and not t.is_key_management
        ]


KEY_MANAGEMENT_ORDERS = frozenset(
    {OrderType.INI, OrderType.HIA, OrderType.HPB, OrderType.SPR},
)

_DIRECTIONS: dict[OrderType, OrderDirection] = {
    OrderType.INI: OrderDirection.UPLOAD,
    OrderType.HIA: OrderDirection.UPLOAD,
    OrderType.HPB: OrderDirection.DOWNLOAD,
    OrderType.SPR: OrderDirection.UPLOAD,
    OrderType.STA: OrderDirection.DOWNLOAD,
    OrderType.VMK: OrderDirection.DOWNLOAD,
    OrderType.C52: OrderDirection.DOWNLOAD,
    OrderType.C53: OrderDirection.DOWNLOAD,
    OrderType.C54: OrderDirection.DOWNLOAD,
    OrderType.C5N: OrderDirection.DOWNLOAD,
    OrderType.CIZ: OrderDirection.DOWNLOAD,
    OrderType.ZDF: OrderDirection.DOWNLOAD,
    OrderType.ZB6: OrderDirection.DOWNLOAD,
    OrderType.PTK: OrderDirection.DOWNLOAD,
    OrderType.HAC: OrderDirection.DOWNLOAD,
    OrderType.Z01: OrderDirection.DOWNLOAD,
    OrderType.CRC: OrderDirection.DOWNLOAD,
    OrderType.CRJ: OrderDirection.DOWNLOAD,
    OrderType.CRZ: OrderDirection.DOWNLOAD,
    OrderType.HAA: OrderDirection.DOWNLOAD,
    OrderType.HTD: OrderDirection.DOWNLOAD,
    OrderType.XKD: OrderDirection.UPLOAD,
    OrderType.FUL: OrderDirection.UPLOAD,
    OrderType.XCT: OrderDirection.UPLOAD,
    OrderType.XE2: OrderDirection.UPLOAD,
    OrderType.CCT: OrderDirection.UPLOAD,
    OrderType.CIP: OrderDirection.UPLOAD,
}

_DESCRIPTIONS: dict[OrderType, str] = {
    OrderType.INI: "Send INI request",
    OrderType.HIA: "Send HIA request",
    OrderType.HPB: "Send HPB request",
    OrderType.SPR: "Send SPR request (revoke subscriber)",
    OrderType.STA: "Fetch STA file (MT940 file)",
    OrderType.VMK: "Fetch VMK file (MT942 file)",
    OrderType.C52: "Fetch camt.052 file",
    OrderType.C53: "Fetch camt.053 file",
    OrderType.C54: "Fetch camt.054 file",
    OrderType.C5N: "Fetch C5N file (zip file with camt.054 documents)",
    OrderType.CIZ: "Fetch CIZ file",
    OrderType.ZDF: "Fetch ZDF file (zip file with documents)",
    OrderType.ZB6: "Fetch ZB6 file",
    OrderType.PTK: "Fetch client protocol file (TXT)",
    OrderType.HAC: "Fetch client protocol file (XML)",
    OrderType.Z01: "Fetch Z01 file",
    OrderType.CRC: "Fetch CRC file",
    OrderType.CRJ: "Fetch CRJ file",
    OrderType.CRZ: "Fetch CRZ file",
    OrderType.HAA: "Fetch HAA file",
    OrderType.HTD: "Fetch HTD file",
    OrderType.XKD: "Send payment order file (DTA format)",
    OrderType.FUL: "Send payment order file (any format)",
    OrderType.XCT: "Send XCT file (any format)",
    OrderType.XE2: "Send XE2 file (any format)",
    OrderType.CCT: "Send CCT file (any format)",
    OrderType.CIP: "Send CIP file (any format)",
}
