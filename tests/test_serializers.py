"""Form validation of quote, requirements and component filter input."""

import time
from decimal import Decimal

import pytest

from apps.catalog.api.filters import ComponentFilterSet
from apps.catalog.api.serializers import (
    BuildRequestSerializer,
    CustomerSerializer,
    PCRequirementsSerializer,
)


REQUIREMENTS = {
    'full_name': 'Asha Rao',
    'phone_number': '9876543210',
    'city': 'Pune',
    'email': 'asha@example.com',
    'purpose': 'Gaming',
    'budget': 'Rs 50,000 - Rs 75,000',
    'payment_preference': 'Full payment',
    'delivery_timeline': 'Within a Month',
}


class TestCustomerSerializer:
    def test_valid_customer(self):
        serializer = CustomerSerializer(data={
            'name': 'Asha', 'email': 'asha.rao@example.co.in', 'phone': '+919876543210',
        })
        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data['notes'] == ''

    @pytest.mark.parametrize('email', ['asha', 'asha@', 'asha@example', 'asha@example.technology'])
    def test_invalid_email(self, email):
        serializer = CustomerSerializer(data={'name': 'Asha', 'email': email})
        assert not serializer.is_valid()
        assert 'email' in serializer.errors

    @pytest.mark.parametrize('phone', ['0123456789', '+0919876543210', '+1234567890123456'])
    def test_invalid_phone(self, phone):
        serializer = CustomerSerializer(data={'name': 'Asha', 'email': 'a@b.com', 'phone': phone})
        assert not serializer.is_valid()
        assert 'phone' in serializer.errors

    @pytest.mark.parametrize('phone, expected', [
        ('9876543210', '+919876543210'),
        ('98765 43210', '+919876543210'),
        ('+1 (415) 555-0100', '+14155550100'),
        ('+123456789012345', '+123456789012345'),
    ])
    def test_phone_is_normalized(self, phone, expected):
        serializer = CustomerSerializer(data={'name': 'Asha', 'email': 'a@b.com', 'phone': phone})
        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data['phone'] == expected

    def test_email_check_is_linear_on_long_input(self):
        started = time.monotonic()
        serializer = CustomerSerializer(data={'name': 'Asha', 'email': 'a' * 60 + '!'})
        assert not serializer.is_valid()
        assert time.monotonic() - started < 1

    def test_long_local_part_still_valid(self):
        serializer = CustomerSerializer(data={'name': 'Asha', 'email': 'a' * 60 + '.rao@example.com'})
        assert serializer.is_valid(), serializer.errors

    def test_name_length(self):
        serializer = CustomerSerializer(data={'name': 'A', 'email': 'a@b.com'})
        assert not serializer.is_valid()
        assert 'name' in serializer.errors

    def test_notes_limit(self):
        serializer = CustomerSerializer(data={'name': 'Asha', 'email': 'a@b.com', 'notes': 'x' * 1001})
        assert not serializer.is_valid()
        assert 'notes' in serializer.errors


class TestPCRequirementsSerializer:
    def test_valid_form(self):
        serializer = PCRequirementsSerializer(data=REQUIREMENTS)
        assert serializer.is_valid(), serializer.errors

        requirements = serializer.save()
        assert requirements.purpose == 'Gaming'
        assert requirements.additional_notes == ''

    def test_other_uses_custom_text(self):
        serializer = PCRequirementsSerializer(data={
            **REQUIREMENTS,
            'purpose': 'Other',
            'custom_purpose': 'Music production',
            'delivery_timeline': 'Other',
            'custom_timeline': 'Before Diwali',
        })
        assert serializer.is_valid(), serializer.errors

        requirements = serializer.save()
        assert requirements.purpose == 'Music production'
        assert requirements.delivery_timeline == 'Before Diwali'
        assert requirements.budget == 'Rs 50,000 - Rs 75,000'

    @pytest.mark.parametrize('phone', ['987654321', '98765432100', '+919876543210', 'phone12345'])
    def test_phone_must_be_ten_digits(self, phone):
        serializer = PCRequirementsSerializer(data={**REQUIREMENTS, 'phone_number': phone})
        assert not serializer.is_valid()
        assert serializer.errors['phone_number'] == ['Please enter a valid 10-digit phone number']

    def test_email_format(self):
        serializer = PCRequirementsSerializer(data={**REQUIREMENTS, 'email': 'asha at example'})
        assert not serializer.is_valid()
        assert serializer.errors['email'] == ['Please enter a valid email']

    def test_required_fields(self):
        serializer = PCRequirementsSerializer(data={})
        assert not serializer.is_valid()
        assert set(serializer.errors) == {
            'full_name', 'phone_number', 'city', 'email', 'purpose',
            'budget', 'payment_preference', 'delivery_timeline',
        }

    def test_unknown_choice(self):
        serializer = PCRequirementsSerializer(data={**REQUIREMENTS, 'payment_preference': 'Crypto'})
        assert not serializer.is_valid()
        assert 'payment_preference' in serializer.errors


class TestBuildRequestSerializer:
    def test_components_and_empty_slots(self):
        serializer = BuildRequestSerializer(data={
            'components': {
                'cpu': {'id': 'cpu-1', 'name': 'Ryzen 5', 'price': '18999'},
                'case-fan': None,
            },
        })
        assert serializer.is_valid(), serializer.errors

        components = serializer.get_components()
        assert components['cpu'].price == Decimal('18999')
        assert components['case-fan'] is None

    def test_negative_price_rejected(self):
        serializer = BuildRequestSerializer(data={
            'components': {'cpu': {'id': 'cpu-1', 'name': 'Ryzen 5', 'price': '-1'}},
        })
        assert not serializer.is_valid()


class TestComponentFilterSet:
    def test_defaults(self):
        filterset = ComponentFilterSet(data={})
        assert filterset.is_valid(), filterset.errors
        filters = filterset.save()
        assert filters.sort == 'popular'
        assert filters.in_stock is None
        assert filters.limit == 12

    def test_price_range_must_be_ordered(self):
        filterset = ComponentFilterSet(data={'min_price': '500', 'max_price': '100'})
        assert not filterset.is_valid()
        assert 'max_price' in filterset.errors

    def test_unknown_sort(self):
        filterset = ComponentFilterSet(data={'sort': 'cheapest'})
        assert not filterset.is_valid()
