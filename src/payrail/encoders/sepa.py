"""SEPA credit transfer encoder (ISO 20022 pain.001.001.03).

The document is assembled with lxml so every text node is escaped by the
serializer; names and references such as ``Smith & <Sons>`` cannot break
the batch structure.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from lxml import etree

from payrail.core.config import SEPAConfig
from payrail.core.exceptions import EncodingError
from payrail.encoders.base import batch_total, first_effective_date, format_amount, require
from payrail.models.payment import BankFileMetadata, Payment

NAMESPACE = "urn:iso:std:iso:20022:tech:xsd:pain.001.001.03"
NOT_PROVIDED = "NOTPROVIDED"


def _el(parent: etree._Element, tag: str, text: str | None = None, **attrib: str) -> etree._Element:
    element = etree.SubElement(parent, f"{{{NAMESPACE}}}{tag}", attrib)
    if text is not None:
        element.text = text
    return element


def _agent(parent: etree._Element, tag: str, bic: str) -> None:
    fin_instn_id = _el(_el(parent, tag), "FinInstnId")
    _el(fin_instn_id, "BIC", bic)


def _account(parent: etree._Element, tag: str, iban: str) -> None:
    _el(_el(_el(parent, tag), "Id"), "IBAN", iban)


class SEPAEncoder:
    """Single PmtInf batch with one CdtTrfTxInf per payment."""

    def __init__(self, config: SEPAConfig | None = None) -> None:
        self._config = config or SEPAConfig()

    def encode(
        self,
        payments: Sequence[Payment],
        metadata: BankFileMetadata,
        created_at: datetime,
    ) -> str:
        stamp = int(created_at.timestamp() * 1000)
        count = str(len(payments))
        ctrl_sum = format_amount(batch_total(payments))
        effective = first_effective_date(payments) or created_at.date()

        root = etree.Element(f"{{{NAMESPACE}}}Document", nsmap={None: NAMESPACE})
        initiation = _el(root, "CstmrCdtTrfInitn")

        try:
            header = _el(initiation, "GrpHdr")
            _el(header, "MsgId", f"SEPA-{stamp}")
            _el(header, "CreDtTm", created_at.isoformat(timespec="seconds"))
            _el(header, "NbOfTxs", count)
            _el(header, "CtrlSum", ctrl_sum)
            _el(_el(header, "InitgPty"), "Nm", metadata.company_name)

            info = _el(initiation, "PmtInf")
            _el(info, "PmtInfId", f"PMT-{stamp}")
            _el(info, "PmtMtd", "TRF")
            _el(info, "BtchBookg", "true")
            _el(info, "NbOfTxs", count)
            _el(info, "CtrlSum", ctrl_sum)
            _el(_el(_el(info, "PmtTpInf"), "SvcLvl"), "Cd", "SEPA")
            _el(info, "ReqdExctnDt", effective.isoformat())
            _el(_el(info, "Dbtr"), "Nm", metadata.company_name)
            _account(info, "DbtrAcct", metadata.company_iban or self._config.debtor_iban)
            _agent(info, "DbtrAgt", metadata.company_bic or self._config.debtor_bic)
            _el(info, "ChrgBr", "SLEV")
        except ValueError as exc:
            raise EncodingError(None, f"SEPA header: {exc}") from exc

        for index, payment in enumerate(payments):
            try:
                self._transaction(info, payment, index)
            except ValueError as exc:
                # lxml refuses control characters and NULs in text nodes
                raise EncodingError(index, f"SEPA text not XML-safe: {exc}") from exc

        body = etree.tostring(root, pretty_print=True, xml_declaration=True, encoding="UTF-8")
        return body.decode("utf-8")

    def _transaction(self, info: etree._Element, payment: Payment, index: int) -> None:
        require(payment, index, "employee_name", rail="SEPA")
        creditor_iban = payment.iban or payment.account_number
        if not creditor_iban:
            raise EncodingError(index, "SEPA requires iban or account_number")

        tx = _el(info, "CdtTrfTxInf")
        _el(_el(tx, "PmtId"), "EndToEndId", payment.id or NOT_PROVIDED)
        _el(
            _el(tx, "Amt"),
            "InstdAmt",
            format_amount(payment.amount),
            Ccy=payment.currency or self._config.default_currency,
        )
        _agent(tx, "CdtrAgt", payment.swift_code or self._config.creditor_bic)
        _el(_el(tx, "Cdtr"), "Nm", payment.employee_name)
        _account(tx, "CdtrAcct", creditor_iban)
        if payment.reference:
            _el(_el(tx, "RmtInf"), "Ustrd", payment.reference)
