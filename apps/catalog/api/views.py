from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.catalog.client import get_storefront_client
from apps.catalog.domain import CustomerDetails
from apps.catalog.services import (
    BuildSelection,
    QuoteService,
    RequirementsService,
    VariantNavigationService,
)
from .filters import ComponentFilterSet
from .serializers import (
    BuildRequestSerializer,
    BuildSummarySerializer,
    ComponentPageSerializer,
    PCBuilderConfigSerializer,
    PCRequirementsSerializer,
    PriceInfoSerializer,
    ProductDetailSerializer,
    ProductListSerializer,
    QuoteReceiptSerializer,
    QuoteRequestSerializer,
    ResolutionSerializer,
    ResolveRequestSerializer,
)


class StorefrontViewSet(viewsets.ViewSet):
    """Base viewset: one upstream client per request."""

    def get_client(self):
        if not hasattr(self, '_client'):
            self._client = get_storefront_client()
        return self._client


class ProductViewSet(StorefrontViewSet):
    """
    API endpoint for the product page variant selector.

    list: Product cards with pagination
    retrieve: Product detail with dimensions and the initial selection
    resolve: Apply one attribute click and settle on a variant
    """
    lookup_field = 'slug'

    def list(self, request):
        """
        Query params: search, sort, min_price, max_price, in_stock,
        condition, min_rating, page, limit
        """
        filterset = ComponentFilterSet(data=request.query_params)
        filterset.is_valid(raise_exception=True)
        filters = filterset.save()

        products, pagination = self.get_client().list_products(**filters.to_params())
        return Response(ProductListSerializer({
            'products': products,
            'pagination': pagination,
        }).data)

    def retrieve(self, request, slug=None):
        product = self.get_client().get_product(slug)
        initial = VariantNavigationService.initial_state(product)

        serializer = ProductDetailSerializer({
            'product': product,
            'dimensions': product.get_dimensions(),
            'variants': product.variants,
            'colors': VariantNavigationService.get_available_colors(product.variants),
            'price_info': product.price_info(initial.variant),
            'initial': initial,
        })
        return Response(serializer.data)

    @action(detail=True, methods=['post'])
    def resolve(self, request, slug=None):
        """
        Resolve a selection change.

        Expected payload:
        {
            "selection": {"color": "black", "storage": "256GB"},
            "key": "color",
            "value": "white"
        }
        """
        serializer = ResolveRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        product = self.get_client().get_product(slug)
        resolution = VariantNavigationService.resolve_change(
            product.variants,
            data['selection'],
            data['key'],
            data['value'],
            dimensions=product.get_dimensions(),
        )

        result = ResolutionSerializer(resolution).data
        result['price_info'] = PriceInfoSerializer(product.price_info(resolution.variant)).data
        return Response(result)


class PCBuilderViewSet(StorefrontViewSet):
    """
    API endpoint for the PC builder.

    The build itself is not stored: callers send the components they hold
    and get totals, completion and quote eligibility back.
    """

    @action(detail=False, methods=['get'])
    def config(self, request):
        config = self.get_client().get_pc_builder_config()
        return Response(PCBuilderConfigSerializer(config).data)

    @action(
        detail=False,
        methods=['get'],
        url_path=r'components/(?P<category_slug>[^/.]+)',
        url_name='components',
    )
    def components(self, request, category_slug=None):
        """
        Components of one category.

        Query params: search, sort, min_price, max_price, in_stock,
        condition, min_rating, page, limit
        """
        filterset = ComponentFilterSet(data=request.query_params)
        filterset.is_valid(raise_exception=True)
        filters = filterset.save()

        page = self.get_client().get_components_by_category(
            category_slug, filters.to_params()
        )
        return Response(ComponentPageSerializer(page).data)

    def _get_build(self, serializer):
        config = self.get_client().get_pc_builder_config()
        return BuildSelection.from_mapping(config, serializer.get_components())

    @action(detail=False, methods=['post'])
    def summary(self, request):
        """
        Totals for the build the caller is holding.

        Expected payload:
        {
            "components": {
                "cpu": {"id": "p1", "name": "Ryzen 5 7600", "price": "18999"},
                "case-fan": null
            }
        }
        """
        serializer = BuildRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        build = self._get_build(serializer)
        return Response(BuildSummarySerializer(build).data)

    @action(detail=False, methods=['post'])
    def quote(self, request):
        """
        Submit the build as a quote request.

        Expected payload:
        {
            "customer": {"name": "...", "email": "...", "phone": "", "notes": ""},
            "components": {"cpu": {...}, "motherboard": {...}},
            "notes": {"cpu": "prefer boxed cooler"}
        }
        """
        serializer = QuoteRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        build = self._get_build(serializer)
        customer = CustomerDetails(**serializer.validated_data['customer'])
        receipt = QuoteService(self.get_client()).submit(
            build, customer, notes=serializer.validated_data['notes']
        )
        return Response(QuoteReceiptSerializer(receipt).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'])
    def requirements(self, request):
        """Expert-build lead form; nothing needs to be selected."""
        serializer = PCRequirementsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        requirements = serializer.save()

        message = RequirementsService(self.get_client()).submit(
            requirements, user_agent=request.META.get('HTTP_USER_AGENT')
        )
        return Response(
            {'message': message or 'Requirements submitted successfully'},
            status=status.HTTP_201_CREATED,
        )
