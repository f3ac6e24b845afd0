from rest_framework import serializers

from apps.catalog.services.browsing import ComponentFilters, DEFAULT_PAGE_SIZE, SORT_CHOICES


class ComponentFilterSet(serializers.Serializer):
    """
    Filter for PC-builder components, read from the query string.

    Example: ?search=ryzen&sort=price-low&min_price=10000&in_stock=true&page=2
    """

    search = serializers.CharField(required=False, allow_blank=True, default='')
    sort = serializers.ChoiceField(choices=SORT_CHOICES, required=False, default='popular')

    # Price filters
    min_price = serializers.DecimalField(
        max_digits=None, decimal_places=None, required=False, min_value=0
    )
    max_price = serializers.DecimalField(
        max_digits=None, decimal_places=None, required=False, min_value=0
    )

    # Stock and quality filters
    in_stock = serializers.BooleanField(required=False, allow_null=True, default=None)
    condition = serializers.CharField(required=False, allow_blank=True, default='')
    min_rating = serializers.FloatField(required=False, min_value=0, max_value=5)

    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(
        required=False, min_value=1, max_value=100, default=DEFAULT_PAGE_SIZE
    )

    def validate(self, attrs):
        low, high = attrs.get('min_price'), attrs.get('max_price')
        if low is not None and high is not None and low > high:
            raise serializers.ValidationError({'max_price': 'Must not be lower than min_price.'})
        return attrs

    def create(self, validated_data):
        return ComponentFilters(**validated_data)
