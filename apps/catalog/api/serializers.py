import re

from rest_framework import serializers

from apps.catalog.domain import PCRequirements, ProductSummary


def money(**kwargs):
    return serializers.DecimalField(max_digits=None, decimal_places=None, **kwargs)


# =============================================================================
# Attribute Serializers
# =============================================================================

class IdentifyingAttributeSerializer(serializers.Serializer):
    key = serializers.CharField()
    value = serializers.CharField()
    label = serializers.CharField()
    display_value = serializers.CharField(source='get_display_value')
    hex_code = serializers.CharField(allow_null=True)
    is_color = serializers.BooleanField()


class AttributeDimensionSerializer(serializers.Serializer):
    key = serializers.CharField()
    label = serializers.CharField()
    possible_values = serializers.ListField(child=serializers.CharField())


class AttributeOptionStateSerializer(serializers.Serializer):
    value = serializers.CharField()
    display_value = serializers.CharField()
    hex_code = serializers.CharField(allow_null=True)
    is_color = serializers.BooleanField()
    stock = serializers.IntegerField()
    variant_count = serializers.IntegerField()
    in_stock = serializers.BooleanField()
    is_compatible = serializers.BooleanField()
    is_selected = serializers.BooleanField()


class DimensionAvailabilitySerializer(serializers.Serializer):
    key = serializers.CharField()
    label = serializers.CharField()
    options = AttributeOptionStateSerializer(many=True)
    compatible_values = serializers.ListField(child=serializers.CharField())


# =============================================================================
# Variant Serializers
# =============================================================================

class VariantSerializer(serializers.Serializer):
    id = serializers.CharField()
    sku = serializers.CharField()
    name = serializers.CharField()
    price = money()
    offer_price = money(allow_null=True)
    effective_price = money()
    is_on_sale = serializers.BooleanField()
    discount_percentage = serializers.IntegerField()
    stock_quantity = serializers.IntegerField()
    is_in_stock = serializers.BooleanField()
    is_active = serializers.BooleanField()
    options = serializers.DictField(child=serializers.CharField())
    identifying_attributes = IdentifyingAttributeSerializer(many=True)
    primary_image_url = serializers.CharField(allow_null=True)
    specifications = serializers.JSONField()


class ResolutionSerializer(serializers.Serializer):
    variant = VariantSerializer(allow_null=True)
    selection = serializers.DictField(child=serializers.CharField())
    exact = serializers.BooleanField()
    availability = serializers.SerializerMethodField()

    def get_availability(self, obj):
        return {
            key: DimensionAvailabilitySerializer(dimension).data
            for key, dimension in obj.availability.items()
        }


class ResolveRequestSerializer(serializers.Serializer):
    """
    One attribute click on the product page.

    Expected payload:
    {
        "selection": {"color": "black", "storage": "256GB"},
        "key": "storage",
        "value": "512GB"
    }
    """
    selection = serializers.DictField(
        child=serializers.CharField(allow_blank=True), required=False, default=dict
    )
    key = serializers.CharField()
    value = serializers.CharField()


# =============================================================================
# Product Serializers
# =============================================================================

class ProductSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    slug = serializers.CharField()
    brand_name = serializers.CharField()
    base_price = money()
    offer_price = money(allow_null=True)
    stock_quantity = serializers.IntegerField()
    has_variants = serializers.BooleanField()
    thumbnail_url = serializers.CharField(allow_null=True)


class PriceInfoSerializer(serializers.Serializer):
    price = money()
    offer_price = money(allow_null=True)
    effective_price = money()
    stock_quantity = serializers.IntegerField()


class ProductDetailSerializer(serializers.Serializer):
    """Product page payload: product, selectors and the initial resolution."""
    product = ProductSerializer()
    dimensions = AttributeDimensionSerializer(many=True)
    variants = VariantSerializer(many=True)
    colors = AttributeOptionStateSerializer(many=True)
    price_info = PriceInfoSerializer()
    initial = ResolutionSerializer()


class ProductSummarySerializer(serializers.Serializer):
    """
    Component card. Also accepted back as input when the caller sends the
    build it is holding.
    """
    id = serializers.CharField()
    name = serializers.CharField()
    slug = serializers.CharField(required=False, allow_blank=True, default='')
    price = money(min_value=0)
    original_price = money(required=False, allow_null=True, min_value=0)
    discount_percentage = serializers.IntegerField(required=False, default=0)
    image = serializers.CharField(required=False, allow_blank=True, default='')
    in_stock = serializers.BooleanField(required=False, default=True)
    stock_quantity = serializers.IntegerField(required=False, allow_null=True)
    brand = serializers.CharField(required=False, allow_blank=True, default='')
    rating = serializers.FloatField(required=False, default=0.0)
    review_count = serializers.IntegerField(required=False, default=0)
    condition = serializers.CharField(required=False, allow_blank=True, default='')


class PaginationSerializer(serializers.Serializer):
    page = serializers.IntegerField()
    pages = serializers.IntegerField()
    total = serializers.IntegerField()
    limit = serializers.IntegerField(allow_null=True)
    has_more = serializers.BooleanField()


class ComponentPageSerializer(serializers.Serializer):
    category = serializers.CharField(source='category_name')
    products = ProductSummarySerializer(many=True)
    pagination = PaginationSerializer()


class ProductListSerializer(serializers.Serializer):
    products = ProductSummarySerializer(many=True)
    pagination = PaginationSerializer()


# =============================================================================
# PC Builder Serializers
# =============================================================================

class CategorySerializer(serializers.Serializer):
    id = serializers.CharField()
    slug = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    image = serializers.CharField(allow_null=True)
    required = serializers.BooleanField()
    sort_order = serializers.IntegerField()


class PCBuilderConfigSerializer(serializers.Serializer):
    required = CategorySerializer(many=True)
    optional = CategorySerializer(many=True)


class BuildRequestSerializer(serializers.Serializer):
    """
    The build the caller is holding.

    Expected payload:
    {
        "components": {"cpu": {...component card...}, "case-fan": null}
    }
    """
    components = serializers.DictField(
        child=ProductSummarySerializer(allow_null=True), required=False, default=dict
    )
    notes = serializers.DictField(
        child=serializers.CharField(allow_blank=True, max_length=500), required=False, default=dict
    )

    def get_components(self):
        return {
            slug: ProductSummary(**data) if data is not None else None
            for slug, data in self.validated_data['components'].items()
        }


class BuildSummarySerializer(serializers.Serializer):
    """Totals of a BuildSelection; each field reads the method of the same name."""
    total_price = money()
    selected_count = serializers.IntegerField()
    required_selected_count = serializers.IntegerField()
    completion_percentage = serializers.IntegerField()
    progress_percentage = serializers.IntegerField()
    is_complete = serializers.BooleanField()
    can_request_quote = serializers.BooleanField()
    missing_required = CategorySerializer(many=True)
    selected = serializers.SerializerMethodField()

    def get_selected(self, build):
        return [
            {
                'category': CategorySerializer(category).data,
                'component': ProductSummarySerializer(component).data,
            }
            for category, component in build.summary()
        ]


# =============================================================================
# Quote Serializers
# =============================================================================

QUOTE_EMAIL_RE = re.compile(r'^\w+([.-]\w+)*@\w+([.-]\w+)*\.\w{2,3}$')
QUOTE_PHONE_RE = re.compile(r'^\+?[1-9]\d{0,14}$')
INDIAN_MOBILE_RE = re.compile(r'^[6-9]\d{9}$')


def normalize_phone(value):
    """Strip separators and prefix bare 10-digit Indian mobiles with +91."""
    value = re.sub(r'[^\d+]', '', value)
    if INDIAN_MOBILE_RE.match(value):
        value = '+91' + value
    return value


class CustomerSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=100)
    email = serializers.CharField(max_length=254)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=20, default='')
    notes = serializers.CharField(required=False, allow_blank=True, max_length=1000, default='')

    def validate_email(self, value):
        if not QUOTE_EMAIL_RE.match(value):
            raise serializers.ValidationError('Please enter a valid email address.')
        return value

    def validate_phone(self, value):
        value = normalize_phone(value)
        if value and not QUOTE_PHONE_RE.match(value):
            raise serializers.ValidationError('Please enter a valid phone number.')
        return value


class QuoteRequestSerializer(BuildRequestSerializer):
    customer = CustomerSerializer()


class QuoteReceiptSerializer(serializers.Serializer):
    quote_id = serializers.CharField()
    total_estimated = money()
    expires_in = serializers.IntegerField(allow_null=True)
    message = serializers.CharField()


# =============================================================================
# Requirements Serializers
# =============================================================================

OTHER = 'Other'

PURPOSE_CHOICES = [
    'Gaming',
    'Office / Work from Home',
    'Professional Work (Editing, Designing, Architecture, etc.)',
    'Educational / Student Use',
    'General Home Use',
    OTHER,
]

BUDGET_CHOICES = [
    'Rs 25,000 - Rs 30,000',
    'Rs 30,000 - Rs 50,000',
    'Rs 50,000 - Rs 75,000',
    'Rs 75,000 - Rs 1,00,000',
    'Rs 1 Lakh - Rs 1.5 Lakh',
    'More than 1.5 Lakh',
    OTHER,
]

PAYMENT_CHOICES = ['Full payment', 'Emi']

TIMELINE_CHOICES = [
    'Immediately (Within 1-2 Days)',
    'Within a Week',
    'Within a Month',
    'Just Checking Prices',
    OTHER,
]

REQUIREMENTS_EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
REQUIREMENTS_PHONE_RE = re.compile(r'^[0-9]{10}$')


class PCRequirementsSerializer(serializers.Serializer):
    """
    Expert-build lead form.
    Picking "Other" for purpose, budget or timeline uses the matching custom_* text.
    """
    full_name = serializers.CharField(max_length=100)
    phone_number = serializers.CharField()
    city = serializers.CharField(max_length=100)
    email = serializers.CharField(max_length=254)
    purpose = serializers.ChoiceField(choices=PURPOSE_CHOICES)
    custom_purpose = serializers.CharField(required=False, allow_blank=True, default='')
    budget = serializers.ChoiceField(choices=BUDGET_CHOICES)
    custom_budget = serializers.CharField(required=False, allow_blank=True, default='')
    payment_preference = serializers.ChoiceField(choices=PAYMENT_CHOICES)
    delivery_timeline = serializers.ChoiceField(choices=TIMELINE_CHOICES)
    custom_timeline = serializers.CharField(required=False, allow_blank=True, default='')
    additional_notes = serializers.CharField(
        required=False, allow_blank=True, max_length=1000, default=''
    )

    def validate_phone_number(self, value):
        if not REQUIREMENTS_PHONE_RE.match(value):
            raise serializers.ValidationError('Please enter a valid 10-digit phone number')
        return value

    def validate_email(self, value):
        if not REQUIREMENTS_EMAIL_RE.match(value):
            raise serializers.ValidationError('Please enter a valid email')
        return value

    def create(self, validated_data):
        def resolve(choice, custom):
            return validated_data.get(custom, '') if validated_data[choice] == OTHER else validated_data[choice]

        return PCRequirements(
            full_name=validated_data['full_name'],
            phone_number=validated_data['phone_number'],
            city=validated_data['city'],
            email=validated_data['email'],
            purpose=resolve('purpose', 'custom_purpose'),
            budget=resolve('budget', 'custom_budget'),
            payment_preference=validated_data['payment_preference'],
            delivery_timeline=resolve('delivery_timeline', 'custom_timeline'),
            additional_notes=validated_data.get('additional_notes', ''),
        )
