"""Schemas for the populated invoice record graph returned by the clinic API.

The API returns camelCase JSON. The ``client`` slot holds either a client
(firstName/lastName) or an organization (name); ``animalSections[].animalId``
is either a populated animal or a bare id.
"""

from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .invoice import (
    Address,
    AnimalInfo,
    AnimalSection,
    InvoiceHeaderInfo,
    InvoiceLayoutInput,
    LineItem,
    PartyBlock,
)


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AddressRecord(_Record):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = Field(None, alias="zipCode")
    country: Optional[str] = None

    def to_address(self) -> Address:
        return Address(
            street=self.street or "",
            city=self.city or "",
            state=self.state or "",
            zip_code=self.zip_code or "",
            country=self.country or "",
        )


class PartyRecord(_Record):
    """Client or organization occupying the invoice's client slot."""

    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    name: Optional[str] = None
    address: Optional[AddressRecord] = None

    def to_party(self) -> PartyBlock:
        address = self.address.to_address() if self.address else None
        if self.first_name or self.last_name:
            return PartyBlock.for_client(self.first_name or "", self.last_name or "", address)
        return PartyBlock.for_organization(self.name or "", address)


class AnimalRecord(_Record):
    name: Optional[str] = None
    species: Optional[str] = None
    breed: Optional[str] = None


class LineItemRecord(_Record):
    procedure: str = ""
    description: str = ""
    quantity: float = 1
    unit_price: float = Field(0.0, alias="unitPrice")


class AnimalSectionRecord(_Record):
    animal: Union[AnimalRecord, str, None] = Field(None, alias="animalId")
    items: List[LineItemRecord] = Field(default_factory=list)
    subtotal: Optional[float] = None


class InvoiceRecord(_Record):
    """Populated invoice as served by the invoices endpoint."""

    invoice_number: str = Field("", alias="invoiceNumber")
    issue_date: Optional[Union[datetime, date]] = Field(None, alias="date")
    due_date: Optional[Union[datetime, date]] = Field(None, alias="dueDate")
    status: str = "draft"
    payment_method: Optional[str] = Field(None, alias="paymentMethod")
    payment_date: Optional[Union[datetime, date]] = Field(None, alias="paymentDate")
    client: Optional[PartyRecord] = None
    animal_sections: List[AnimalSectionRecord] = Field(default_factory=list, alias="animalSections")
    subtotal: Optional[float] = None
    total: Optional[float] = None

    def to_layout_input(self) -> InvoiceLayoutInput:
        """Convert to the renderer's input model."""
        sections = []
        for section in self.animal_sections:
            if isinstance(section.animal, AnimalRecord):
                animal = AnimalInfo(
                    name=section.animal.name or "",
                    species=section.animal.species or "",
                    breed=section.animal.breed or "",
                )
            else:
                animal = None
            items = [
                LineItem(
                    procedure=item.procedure,
                    description=item.description,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                )
                for item in section.items
            ]
            sections.append(AnimalSection(animal=animal, items=items, subtotal=section.subtotal))

        header = InvoiceHeaderInfo(
            invoice_number=self.invoice_number,
            issue_date=_as_date(self.issue_date),
            due_date=_as_date(self.due_date),
            status=self.status,
            payment_method=self.payment_method,
            payment_date=_as_date(self.payment_date),
        )
        return InvoiceLayoutInput(
            header=header,
            party=self.client.to_party() if self.client else None,
            sections=sections,
            subtotal=self.subtotal,
            total=self.total,
        )


def _as_date(value: Optional[Union[datetime, date]]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value
