from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class CustomerDetails:
    name: str
    email: str
    phone: str = ''
    notes: str = ''

    def to_payload(self):
        return {
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'notes': self.notes,
        }


@dataclass(frozen=True)
class ComponentSelection:
    """
    One line of a quote request, one per configured category.
    Unselected categories are sent too so the sales team sees what was skipped.
    """
    category: str
    category_slug: str
    product_id: Optional[str] = None
    product_name: str = ''
    product_price: Decimal = Decimal('0')
    user_note: str = ''
    selected: bool = False
    required: bool = False
    sort_order: int = 0

    def to_payload(self):
        return {
            'category': self.category,
            'categorySlug': self.category_slug,
            'productId': self.product_id,
            'productName': self.product_name,
            'productPrice': float(self.product_price),
            'userNote': self.user_note,
            'selected': self.selected,
            'required': self.required,
            'sortOrder': self.sort_order,
        }


@dataclass(frozen=True)
class QuoteReceipt:
    quote_id: str
    total_estimated: Decimal = Decimal('0')
    expires_in: Optional[int] = None
    message: str = ''


@dataclass(frozen=True)
class PCRequirements:
    """
    Expert-build lead form, with "Other" choices already replaced by the
    customer's own text.
    """
    full_name: str
    phone_number: str
    city: str
    email: str
    purpose: str
    budget: str
    payment_preference: str
    delivery_timeline: str
    additional_notes: str = ''

    def to_payload(self, user_agent=None, submitted_at=None):
        return {
            'customer': {
                'name': self.full_name,
                'email': self.email,
                'phone': self.phone_number,
                'city': self.city,
                'additionalNotes': self.additional_notes,
            },
            'requirements': {
                'purpose': self.purpose,
                'budget': self.budget,
                'paymentPreference': self.payment_preference,
                'deliveryTimeline': self.delivery_timeline,
            },
            'source': 'requirements_form',
            'metadata': {
                'userAgent': user_agent or '',
                'submittedAt': submitted_at,
            },
        }
