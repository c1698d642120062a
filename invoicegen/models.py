import math
import uuid
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _finite_or_zero(value: Any) -> float:
    """Numbers coming from the form may be blank, garbage or NaN; treat those as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(num):
        return 0.0
    return num


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)


class LineItem(_Model):
    id: str
    material_no: str = Field("", alias="materialNo")
    description: str = ""
    qty: float = 0.0
    unit: str = ""
    price: float = 0.0

    @field_validator("qty", "price", mode="before")
    @classmethod
    def _coerce_number(cls, v: Any) -> float:
        return _finite_or_zero(v)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> str:
        return "" if v is None else str(v)


class BillTo(_Model):
    company_name: str = Field("", alias="companyName")
    address: str = ""


class BankDetails(_Model):
    bank_name: str = Field("", alias="bankName")
    account: str = ""
    swift: str = ""


class InvoiceRecord(_Model):
    vendor_name: str = Field("", alias="vendorName")
    invoice_number: str = Field("", alias="invoiceNumber")
    invoice_date: str = Field("", alias="invoiceDate")
    bill_to: BillTo = Field(default_factory=BillTo, alias="billTo")
    ref_po: str = Field("", alias="refPO")
    currency: str = ""
    line_items: List[LineItem] = Field(default_factory=list, alias="lineItems")
    tax_rate: float = Field(0.0, alias="taxRate")
    bank_details: BankDetails = Field(default_factory=BankDetails, alias="bankDetails")

    @field_validator("tax_rate", mode="before")
    @classmethod
    def _coerce_rate(cls, v: Any) -> float:
        return _finite_or_zero(v)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True)


def snapshot(record: InvoiceRecord) -> InvoiceRecord:
    """Independent deep copy; later edits to ``record`` never reach the copy."""
    return record.model_copy(deep=True)


def default_invoice() -> InvoiceRecord:
    return InvoiceRecord(
        vendor_name="New_Domestic Customer US 6 (Returns)",
        invoice_number="INV-2526-035",
        invoice_date="2026-01-29",
        bill_to=BillTo(company_name="Nestle Limited", address="Noida City, sector 15, 700052"),
        ref_po="4500000344",
        currency="INR",
        line_items=[
            LineItem(id="1", material_no="CH-9003_1", description="Polyethylene Glycols", qty=10, unit="PC", price=50.00),
            LineItem(id="2", material_no="504", description="Copper Oxide_New", qty=10, unit="PC", price=2208.50),
        ],
        tax_rate=18,
        bank_details=BankDetails(bank_name="Sample Bank", account="9988776655", swift="SAMPLE01"),
    )


# ----------------------------
# Line item edits (form side)
# ----------------------------
def _new_item_id(record: InvoiceRecord) -> str:
    taken = {it.id for it in record.line_items}
    while True:
        candidate = uuid.uuid4().hex[:12]
        if candidate not in taken:
            return candidate


def add_line_item(record: InvoiceRecord) -> InvoiceRecord:
    copy = snapshot(record)
    item = LineItem(id=_new_item_id(copy), material_no="", description="", qty=1, unit="PC", price=0)
    return copy.model_copy(update={"line_items": [*copy.line_items, item]})


def remove_line_item(record: InvoiceRecord, item_id: str) -> InvoiceRecord:
    copy = snapshot(record)
    # the last remaining row is never removed
    if len(copy.line_items) <= 1:
        return copy
    return copy.model_copy(update={"line_items": [it for it in copy.line_items if it.id != item_id]})


def update_line_item(record: InvoiceRecord, item_id: str, **fields: Any) -> InvoiceRecord:
    copy = snapshot(record)
    items = []
    for it in copy.line_items:
        if it.id == item_id:
            data = it.model_dump()
            data.update(fields)
            it = LineItem.model_validate(data)
        items.append(it)
    return copy.model_copy(update={"line_items": items})
