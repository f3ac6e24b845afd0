"""
Decoding of upstream commerce API payloads.

The upstream API speaks camelCase JSON with Mongo style `_id` keys. Each
serializer here validates one object shape and builds the matching domain
object, so nothing past the HTTP boundary has to guess at optional keys.
A payload that does not fit raises DecodeError with DRF's field errors.
"""

from dataclasses import replace
from decimal import Decimal

from rest_framework import serializers

from apps.catalog.domain import (
    AttributeDimension,
    IdentifyingAttribute,
    Variant,
    Product,
    ProductSummary,
    Pagination,
    ComponentPage,
    Category,
    PCBuilderConfig,
    QuoteReceipt,
)
from apps.catalog.exceptions import DecodeError


def money(**kwargs):
    """Decimal field without a fixed scale; upstream prices are not rounded."""
    return serializers.DecimalField(max_digits=None, decimal_places=None, **kwargs)


def _brand_name(value):
    if isinstance(value, dict):
        return value.get('name') or ''
    return value or ''


class PayloadSerializer(serializers.Serializer):
    """Base serializer: validate a payload, then build a domain object."""

    def to_internal_value(self, data):
        # Some endpoints answer with `id`, most with `_id`
        if isinstance(data, dict) and '_id' not in data and 'id' in data:
            data = {**data, '_id': data['id']}
        return super().to_internal_value(data)

    @classmethod
    def build(cls, data):
        raise NotImplementedError

    @classmethod
    def decode(cls, payload):
        serializer = cls(data=payload)
        if not serializer.is_valid():
            raise DecodeError(
                f"Invalid {cls.__name__.replace('PayloadSerializer', '')} payload: {serializer.errors}",
                errors=serializer.errors,
            )
        return cls.build(serializer.validated_data)

    @classmethod
    def decode_many(cls, payload):
        if not isinstance(payload, list):
            raise DecodeError(f"Expected a list, got {type(payload).__name__}")
        return tuple(cls.decode(item) for item in payload)


# =============================================================================
# Attributes and Variants
# =============================================================================

class IdentifyingAttributePayloadSerializer(PayloadSerializer):
    key = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    value = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    label = serializers.CharField(required=False, allow_blank=True, default='')
    displayValue = serializers.CharField(
        source='display_value', required=False, allow_blank=True, allow_null=True
    )
    hexCode = serializers.CharField(
        source='hex_code', required=False, allow_blank=True, allow_null=True
    )
    isColor = serializers.BooleanField(source='is_color', required=False, default=False)

    @classmethod
    def build(cls, data):
        return IdentifyingAttribute(
            key=data['key'],
            value=data['value'],
            label=data.get('label') or '',
            display_value=data.get('display_value') or '',
            hex_code=data.get('hex_code') or None,
            is_color=bool(data.get('is_color')),
        )


class VariantPayloadSerializer(PayloadSerializer):
    _id = serializers.CharField(source='id')
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    sku = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    price = money(required=False, default=Decimal('0'))
    offerPrice = money(source='offer_price', required=False, allow_null=True)
    stockQuantity = serializers.IntegerField(
        source='stock_quantity', required=False, allow_null=True
    )
    isActive = serializers.BooleanField(source='is_active', required=False, default=True)
    identifyingAttributes = IdentifyingAttributePayloadSerializer(
        source='identifying_attributes', many=True, required=False, allow_null=True
    )
    images = serializers.JSONField(required=False)
    specifications = serializers.JSONField(required=False)

    @classmethod
    def build(cls, data):
        attributes = data.get('identifying_attributes') or []
        images = data.get('images')
        specifications = data.get('specifications')
        return Variant(
            id=data['id'],
            sku=data.get('sku') or '',
            name=data.get('name') or '',
            price=data.get('price') or Decimal('0'),
            offer_price=data.get('offer_price'),
            stock_quantity=data.get('stock_quantity') or 0,
            is_active=data.get('is_active', True),
            # Entries without a key or value never match a selection
            identifying_attributes=tuple(
                IdentifyingAttributePayloadSerializer.build(attr)
                for attr in attributes
                if attr.get('key') and attr.get('value')
            ),
            images=images if isinstance(images, dict) else {},
            specifications=specifications if isinstance(specifications, list) else [],
        )


class VariantSpecPayloadSerializer(PayloadSerializer):
    """`variantCreatingSpecs` entry: a spec that splits the product into variants."""
    specKey = serializers.CharField(source='key')
    specLabel = serializers.CharField(
        source='label', required=False, allow_blank=True, default=''
    )
    possibleValues = serializers.ListField(
        source='values', child=serializers.CharField(), required=False, default=list
    )

    @classmethod
    def build(cls, data):
        return AttributeDimension(
            key=data['key'],
            label=data.get('label') or data['key'],
            possible_values=tuple(data.get('values') or ()),
        )


class VariantAttributePayloadSerializer(PayloadSerializer):
    """`variantAttributes` entry, the older spelling of a variant dimension."""
    key = serializers.CharField()
    label = serializers.CharField(required=False, allow_blank=True, default='')
    values = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )

    @classmethod
    def build(cls, data):
        return AttributeDimension(
            key=data['key'],
            label=data.get('label') or data['key'],
            possible_values=tuple(data.get('values') or ()),
        )


class VariantConfigurationPayloadSerializer(PayloadSerializer):
    hasVariants = serializers.BooleanField(
        source='has_variants', required=False, default=False
    )
    variantCreatingSpecs = VariantSpecPayloadSerializer(
        source='creating_specs', many=True, required=False, allow_null=True
    )
    variantAttributes = VariantAttributePayloadSerializer(
        source='attributes', many=True, required=False, allow_null=True
    )

    @classmethod
    def build(cls, data):
        specs = data.get('creating_specs') or []
        if specs:
            dimensions = tuple(VariantSpecPayloadSerializer.build(s) for s in specs)
        else:
            dimensions = tuple(
                VariantAttributePayloadSerializer.build(a)
                for a in data.get('attributes') or []
            )
        return data.get('has_variants', False), dimensions


# =============================================================================
# Products
# =============================================================================

class ProductPayloadSerializer(PayloadSerializer):
    """Product detail as served by `GET /products/slug/:slug`."""
    _id = serializers.CharField(source='id')
    name = serializers.CharField()
    slug = serializers.CharField(required=False, allow_blank=True, default='')
    brand = serializers.JSONField(required=False)
    basePrice = money(source='base_price', required=False, allow_null=True)
    offerPrice = money(source='offer_price', required=False, allow_null=True)
    stockQuantity = serializers.IntegerField(
        source='stock_quantity', required=False, allow_null=True
    )
    variants = VariantPayloadSerializer(many=True, required=False, allow_null=True)
    variantConfiguration = VariantConfigurationPayloadSerializer(
        source='variant_configuration', required=False, allow_null=True
    )
    images = serializers.JSONField(required=False)

    @classmethod
    def build(cls, data):
        variants = tuple(
            VariantPayloadSerializer.build(v) for v in data.get('variants') or []
        )
        has_variants, dimensions = False, ()
        if data.get('variant_configuration'):
            has_variants, dimensions = VariantConfigurationPayloadSerializer.build(
                data['variant_configuration']
            )

        thumbnail_url = None
        images = data.get('images')
        if isinstance(images, dict) and isinstance(images.get('thumbnail'), dict):
            thumbnail_url = images['thumbnail'].get('url') or None

        return Product(
            id=data['id'],
            name=data['name'],
            slug=data.get('slug') or '',
            brand_name=_brand_name(data.get('brand')),
            base_price=data.get('base_price') or Decimal('0'),
            offer_price=data.get('offer_price'),
            stock_quantity=data.get('stock_quantity') or 0,
            has_variants=has_variants or bool(variants),
            variants=variants,
            dimensions=dimensions,
            thumbnail_url=thumbnail_url,
        )


class ProductSummaryPayloadSerializer(PayloadSerializer):
    """Component card from the PC-builder and product list endpoints."""
    _id = serializers.CharField(source='id')
    name = serializers.CharField()
    slug = serializers.CharField(required=False, allow_blank=True, default='')
    price = money(required=False, default=Decimal('0'))
    originalPrice = money(source='original_price', required=False, allow_null=True)
    discountPercentage = serializers.FloatField(
        source='discount_percentage', required=False, allow_null=True
    )
    image = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    inStock = serializers.BooleanField(source='in_stock', required=False, default=True)
    stockQuantity = serializers.IntegerField(
        source='stock_quantity', required=False, allow_null=True
    )
    brand = serializers.JSONField(required=False)
    rating = serializers.FloatField(required=False, allow_null=True)
    reviewCount = serializers.IntegerField(
        source='review_count', required=False, allow_null=True
    )
    condition = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    @classmethod
    def build(cls, data):
        return ProductSummary(
            id=data['id'],
            name=data['name'],
            slug=data.get('slug') or '',
            price=data.get('price') or Decimal('0'),
            original_price=data.get('original_price'),
            discount_percentage=int(data.get('discount_percentage') or 0),
            image=data.get('image') or '',
            in_stock=data.get('in_stock', True),
            stock_quantity=data.get('stock_quantity'),
            brand=_brand_name(data.get('brand')),
            rating=data.get('rating') or 0.0,
            review_count=data.get('review_count') or 0,
            condition=data.get('condition') or '',
        )


class PaginationPayloadSerializer(PayloadSerializer):
    page = serializers.IntegerField(required=False, default=1)
    pages = serializers.IntegerField(required=False, allow_null=True)
    totalPages = serializers.IntegerField(
        source='total_pages', required=False, allow_null=True
    )
    total = serializers.IntegerField(required=False, default=0)
    limit = serializers.IntegerField(required=False, allow_null=True)

    @classmethod
    def build(cls, data):
        pages = data.get('pages') or data.get('total_pages') or 1
        return Pagination(
            page=data.get('page') or 1,
            pages=pages,
            total=data.get('total') or 0,
            limit=data.get('limit'),
        )


class ComponentPagePayloadSerializer(PayloadSerializer):
    products = ProductSummaryPayloadSerializer(many=True, required=False, default=list)
    pagination = PaginationPayloadSerializer(required=False, allow_null=True)
    category = serializers.JSONField(required=False)

    @classmethod
    def build(cls, data):
        category = data.get('category')
        return ComponentPage(
            products=tuple(
                ProductSummaryPayloadSerializer.build(p) for p in data.get('products') or []
            ),
            pagination=PaginationPayloadSerializer.build(data.get('pagination') or {}),
            category_name=category.get('name', '') if isinstance(category, dict) else '',
        )


# =============================================================================
# PC Builder
# =============================================================================

class CategoryPayloadSerializer(PayloadSerializer):
    _id = serializers.CharField(source='id', required=False, allow_blank=True, default='')
    name = serializers.CharField()
    slug = serializers.SlugField()
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    image = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    required = serializers.BooleanField(required=False, default=False)
    sortOrder = serializers.IntegerField(source='sort_order', required=False, default=0)

    @classmethod
    def build(cls, data):
        return Category(
            slug=data['slug'],
            name=data['name'],
            id=data.get('id') or '',
            description=data.get('description') or '',
            image=data.get('image') or None,
            required=data.get('required', False),
            sort_order=data.get('sort_order') or 0,
        )


class PCBuilderConfigPayloadSerializer(PayloadSerializer):
    required = CategoryPayloadSerializer(many=True, required=False, default=list)
    optional = CategoryPayloadSerializer(many=True, required=False, default=list)

    @classmethod
    def build(cls, data):
        # Membership in the `required` list is what makes a slot mandatory
        required = tuple(
            replace(CategoryPayloadSerializer.build(c), required=True)
            for c in data.get('required') or []
        )
        optional = tuple(
            replace(CategoryPayloadSerializer.build(c), required=False)
            for c in data.get('optional') or []
        )
        return PCBuilderConfig(required=required, optional=optional)


class QuoteReceiptPayloadSerializer(PayloadSerializer):
    quoteId = serializers.CharField(source='quote_id')
    totalEstimated = money(source='total_estimated', required=False, allow_null=True)
    expiresIn = serializers.IntegerField(source='expires_in', required=False, allow_null=True)
    message = serializers.CharField(required=False, allow_blank=True, default='')

    @classmethod
    def build(cls, data):
        return QuoteReceipt(
            quote_id=data['quote_id'],
            total_estimated=data.get('total_estimated') or Decimal('0'),
            expires_in=data.get('expires_in'),
            message=data.get('message') or '',
        )
