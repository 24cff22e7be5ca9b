"""Invoice layout input: header, party block, animal sections and line items."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Union

Number = Union[int, float, str, Decimal]

CENT = Decimal("0.01")


def round_currency(value: Number) -> Decimal:
    """Round a monetary value to cents (half-up).

    Floats are converted through their shortest repr.
    """
    if isinstance(value, float):
        value = repr(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class Address:
    """Postal address of a client or organization."""

    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""

    def display_lines(self, default_country: str = "") -> List[str]:
        """Address lines in drawing order.

        Street; then city, state and zip joined by ", "; then the country
        unless it equals default_country. Missing components are skipped.
        """
        lines = []
        if self.street and self.street.strip():
            lines.append(self.street.strip())
        locality = [p.strip() for p in (self.city, self.state, self.zip_code) if p and p.strip()]
        if locality:
            lines.append(", ".join(locality))
        country = (self.country or "").strip()
        if country and country.lower() != (default_country or "").strip().lower():
            lines.append(country)
        return lines


@dataclass
class PartyBlock:
    """Who is billed: a client or an organization, sharing one slot.

    Attributes:
        display_name: Client full name or organization name
        address: Optional postal address
        is_organization: True when the slot holds an organization
    """

    display_name: str
    address: Optional[Address] = None
    is_organization: bool = False

    @classmethod
    def for_client(cls, first_name: str, last_name: str,
                   address: Optional[Address] = None) -> PartyBlock:
        name = f"{first_name or ''} {last_name or ''}".strip()
        return cls(display_name=name, address=address)

    @classmethod
    def for_organization(cls, name: str, address: Optional[Address] = None) -> PartyBlock:
        return cls(display_name=(name or "").strip(), address=address, is_organization=True)


@dataclass
class AnimalInfo:
    """Animal shown in section sub-headings and the summary line."""

    name: str = ""
    species: str = ""
    breed: str = ""

    def label(self) -> str:
        return f"{self.name or 'Unknown'} ({self.species or 'Unknown'})"


@dataclass
class LineItem:
    """One billed procedure.

    total is rounded to cents when the item is created, so every render of
    the same item prints the same amount.
    """

    procedure: str = ""
    description: str = ""
    quantity: Number = 1
    unit_price: Number = Decimal("0")
    total: Decimal = field(init=False)

    def __post_init__(self):
        self.unit_price = round_currency(self.unit_price)
        self.quantity = Decimal(str(self.quantity))
        if self.quantity < 0:
            raise ValueError(f"LineItem quantity must be >= 0, got {self.quantity}")
        self.total = round_currency(self.quantity * self.unit_price)

    def quantity_text(self) -> str:
        """Quantity without a trailing ``.0`` for whole numbers."""
        if self.quantity == self.quantity.to_integral_value():
            return str(int(self.quantity))
        return str(self.quantity.normalize())


@dataclass
class AnimalSection:
    """Line items billed against one animal.

    animal is None when the record only carries an unpopulated animal id.
    """

    animal: Optional[AnimalInfo] = None
    items: List[LineItem] = field(default_factory=list)
    subtotal: Optional[Number] = None

    def __post_init__(self):
        if self.subtotal is None:
            self.subtotal = round_currency(sum((item.total for item in self.items), Decimal("0")))
        else:
            self.subtotal = round_currency(self.subtotal)


@dataclass
class InvoiceHeaderInfo:
    """Invoice header fields.

    Attributes:
        invoice_number: Invoice number (``N/A`` is drawn when empty)
        issue_date: Invoice date
        due_date: Payment due date
        status: draft, sent, paid, overdue or cancelled
        payment_method: cash, credit_card, bank_transfer, check or None
        payment_date: Date the invoice was paid
    """

    invoice_number: str = ""
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    status: str = "draft"
    payment_method: Optional[str] = None
    payment_date: Optional[date] = None


@dataclass
class InvoiceLayoutInput:
    """Everything the invoice renderer draws.

    subtotal and total default to the sum of section subtotals.
    """

    header: InvoiceHeaderInfo
    party: Optional[PartyBlock] = None
    sections: List[AnimalSection] = field(default_factory=list)
    subtotal: Optional[Number] = None
    total: Optional[Number] = None

    def __post_init__(self):
        computed = round_currency(sum((s.subtotal for s in self.sections), Decimal("0")))
        self.subtotal = computed if self.subtotal is None else round_currency(self.subtotal)
        self.total = self.subtotal if self.total is None else round_currency(self.total)

    @property
    def item_count(self) -> int:
        return sum(len(section.items) for section in self.sections)
