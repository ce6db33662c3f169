#
# EPC QR payload (SEPA credit transfer, "GiroCode").
# https://www.europeanpaymentscouncil.eu/document-library/guidance-documents/quick-response-code-guidelines-enable-data-capture-initiation
#

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

EPC_SERVICE_TAG = "BCD"
EPC_VERSION = "002"
EPC_CHARSET_LATIN1 = "2"     # ISO 8859-1, one octet per character
EPC_IDENTIFICATION = "SCT"

EPC_MAX_NAME = 70
EPC_MAX_REMITTANCE = 140


def format_amount(amount) -> str:
    """EUR followed by the amount with two decimals, empty if not positive."""
    if (amount is None or amount == ""):
        return ""

    # anything that is not a finite positive number leaves the field empty
    try:
        value = Decimal(str(amount))

        if (not value.is_finite() or value <= 0):
            return ""

        value = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return ""

    return f"EUR{value}"


def build_epc_payload(name : str, iban : str, bic : str="", amount=None, purpose : str="") -> str:
    """
    Fields are in a fixed order, one per line. Optional fields are left
    empty but their lines are kept.
    """
    fields = (
        EPC_SERVICE_TAG,
        EPC_VERSION,
        EPC_CHARSET_LATIN1,
        EPC_IDENTIFICATION,
        (bic or "").strip(),
        (name or "").strip()[:EPC_MAX_NAME],
        re.sub(r"\s+", "", iban or "").upper(),
        format_amount(amount),
        "",     # purpose code
        (purpose or "").strip()[:EPC_MAX_REMITTANCE],
        "")     # beneficiary to originator information

    return "\n".join(fields)
