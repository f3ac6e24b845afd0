"""Upstream payload decoding: camelCase JSON in, domain objects or DecodeError out."""

from decimal import Decimal

import pytest

from apps.catalog.exceptions import DecodeError
from apps.catalog.payloads import (
    ComponentPagePayloadSerializer,
    PCBuilderConfigPayloadSerializer,
    ProductPayloadSerializer,
    QuoteReceiptPayloadSerializer,
    VariantPayloadSerializer,
)


PRODUCT_PAYLOAD = {
    '_id': '64f0c0ffee',
    'name': 'iPhone 15',
    'slug': 'iphone-15',
    'brand': {'_id': 'b1', 'name': 'Apple'},
    'basePrice': 79900,
    'offerPrice': 74900,
    'stockQuantity': 5,
    'images': {'thumbnail': {'url': 'https://cdn.example/thumb.jpg'}},
    'variantConfiguration': {
        'hasVariants': True,
        'variantCreatingSpecs': [
            {'specKey': 'color', 'specLabel': 'Color', 'possibleValues': ['black', 'blue']},
            {'specKey': 'storage', 'specLabel': 'Storage', 'possibleValues': ['128GB', '256GB']},
        ],
    },
    'variants': [
        {
            '_id': 'v1',
            'sku': 'IP15-BLK-128',
            'name': 'iPhone 15 Black 128GB',
            'price': 79900,
            'offerPrice': 74900.5,
            'stockQuantity': 3,
            'isActive': True,
            'identifyingAttributes': [
                {'key': 'color', 'value': 'black', 'displayValue': 'Black',
                 'hexCode': '#000000', 'isColor': True},
                {'key': 'storage', 'value': '128GB'},
            ],
            'images': {'gallery': [{'url': 'https://cdn.example/v1.jpg'}]},
        },
        {
            '_id': 'v2',
            'price': 89900,
            'stockQuantity': None,
            'identifyingAttributes': [{'key': 'color', 'value': 'blue'}],
        },
    ],
}


class TestProductPayload:
    def test_decodes_product(self):
        product = ProductPayloadSerializer.decode(PRODUCT_PAYLOAD)

        assert product.id == '64f0c0ffee'
        assert product.brand_name == 'Apple'
        assert product.base_price == Decimal('79900')
        assert product.thumbnail_url == 'https://cdn.example/thumb.jpg'
        assert product.has_variants
        assert [d.key for d in product.dimensions] == ['color', 'storage']
        assert product.dimensions[1].possible_values == ('128GB', '256GB')

    def test_decodes_variants(self):
        first, second = ProductPayloadSerializer.decode(PRODUCT_PAYLOAD).variants

        assert first.offer_price == Decimal('74900.5')
        assert first.options == {'color': 'black', 'storage': '128GB'}
        assert first.get_attribute('color').is_color
        assert first.primary_image_url == 'https://cdn.example/v1.jpg'
        # Missing optional keys fall back to safe defaults
        assert second.is_active is True
        assert second.stock_quantity == 0
        assert second.sku == ''

    def test_accepts_plain_id(self):
        payload = {'id': 'abc', 'name': 'Mouse', 'basePrice': '499'}
        product = ProductPayloadSerializer.decode(payload)
        assert product.id == 'abc'
        assert product.variants == ()

    def test_variant_attributes_spelling(self):
        payload = {
            '_id': 'p',
            'name': 'Shirt',
            'variantConfiguration': {
                'variantAttributes': [{'key': 'size', 'label': 'Size', 'values': ['S', 'M']}],
            },
        }
        product = ProductPayloadSerializer.decode(payload)
        assert product.dimensions[0].key == 'size'
        assert product.dimensions[0].possible_values == ('S', 'M')

    def test_missing_identifying_attributes_is_empty(self):
        variant = VariantPayloadSerializer.decode({'_id': 'v', 'price': 10})
        assert variant.identifying_attributes == ()

    def test_incomplete_attributes_are_skipped(self):
        payload = {
            **PRODUCT_PAYLOAD,
            'variants': [
                PRODUCT_PAYLOAD['variants'][0],
                {
                    '_id': 'v2',
                    'price': 89900,
                    'identifyingAttributes': [
                        {'key': 'color', 'value': ''},
                        {'key': 'storage', 'value': None},
                        {'key': '', 'value': '256GB'},
                        {'value': '512GB'},
                    ],
                },
            ],
        }

        product = ProductPayloadSerializer.decode(payload)

        assert [v.id for v in product.variants] == ['v1', 'v2']
        assert product.variants[1].identifying_attributes == ()
        assert len(product.variants[0].identifying_attributes) == 2

    def test_missing_name_is_a_decode_error(self):
        with pytest.raises(DecodeError) as exc_info:
            ProductPayloadSerializer.decode({'_id': 'p'})
        assert 'name' in exc_info.value.errors

    def test_bad_price_is_a_decode_error(self):
        with pytest.raises(DecodeError):
            VariantPayloadSerializer.decode({'_id': 'v', 'price': 'cheap'})

    def test_non_object_is_a_decode_error(self):
        with pytest.raises(DecodeError):
            ProductPayloadSerializer.decode(['not', 'a', 'product'])


class TestPCBuilderPayloads:
    def test_config_marks_required_by_membership(self):
        config = PCBuilderConfigPayloadSerializer.decode({
            'required': [
                {'_id': 'c2', 'name': 'Motherboard', 'slug': 'motherboard', 'sortOrder': 2},
                {'_id': 'c1', 'name': 'Processor', 'slug': 'cpu', 'sortOrder': 1},
            ],
            'optional': [
                {'_id': 'c3', 'name': 'Case Fan', 'slug': 'case-fan', 'required': True},
            ],
        })

        assert config.slugs == ['cpu', 'motherboard', 'case-fan']
        assert config.is_required('cpu')
        assert not config.get('case-fan').required

    def test_component_page(self):
        page = ComponentPagePayloadSerializer.decode({
            'success': True,
            'products': [
                {'_id': 'p1', 'name': 'Ryzen 5', 'price': 18999, 'originalPrice': 21999,
                 'discountPercentage': 13.6, 'brand': 'AMD', 'inStock': True},
            ],
            'pagination': {'page': 1, 'pages': 3, 'total': 30, 'limit': 12},
            'category': {'name': 'Processor'},
        })

        assert page.category_name == 'Processor'
        assert page.pagination.has_more
        component = page.products[0]
        assert component.price == Decimal('18999')
        assert component.discount_percentage == 13
        assert component.brand == 'AMD'

    def test_component_page_total_pages_spelling(self):
        page = ComponentPagePayloadSerializer.decode({
            'products': [],
            'pagination': {'page': 2, 'totalPages': 2},
        })
        assert page.pagination.pages == 2
        assert not page.pagination.has_more

    def test_quote_receipt(self):
        receipt = QuoteReceiptPayloadSerializer.decode({
            'success': True,
            'quoteId': 'Q-1001',
            'totalEstimated': 32499,
            'expiresIn': 7,
            'message': 'Quote request submitted',
        })
        assert receipt.quote_id == 'Q-1001'
        assert receipt.total_estimated == Decimal('32499')

    def test_quote_receipt_requires_id(self):
        with pytest.raises(DecodeError):
            QuoteReceiptPayloadSerializer.decode({'success': False})
