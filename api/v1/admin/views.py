"""
Admin API views.

License management, dashboard statistics and the product catalogue.
Every route is protected by AdminAuthenticationMiddleware.
"""
import logging
import uuid

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.dependencies import client_ip, get_engine
from api.v1.admin.serializers import (
    CreateLicenseRequestSerializer,
    CreateProductRequestSerializer,
    LicenseSerializer,
    ProductSerializer,
    StatsSerializer,
    UpdateLicenseRequestSerializer,
    UpdateProductRequestSerializer,
)
from licenses.domain.license import LicenseMetadata
from products.application.commands.product_commands import (
    CreateProductCommand,
    UpdateProductCommand,
)

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

ADMIN_AUTH_PARAMETER = OpenApiParameter(
    name="X-API-Key",
    type=str,
    location=OpenApiParameter.HEADER,
    required=False,
    description="Admin API key (or send it as 'Authorization: Bearer <key>')",
)


def _int_param(request: Request, name: str, default: int) -> int:
    try:
        return max(0, int(request.query_params.get(name, default)))
    except (TypeError, ValueError):
        return default


class LicenseListCreateView(APIView):
    """View for listing and creating licenses."""

    @extend_schema(
        operation_id="admin_list_licenses",
        summary="List Licenses",
        description="List licenses, newest first, with their active activations.",
        tags=["Admin API"],
        parameters=[
            ADMIN_AUTH_PARAMETER,
            OpenApiParameter(name="email", type=str, description="Email contains"),
            OpenApiParameter(name="plan", type=str, description="Exact plan"),
            OpenApiParameter(name="limit", type=int, description="Page size (max 100)"),
            OpenApiParameter(name="offset", type=int, description="Page start"),
        ],
        responses={200: LicenseSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        licenses = get_engine().list_licenses(
            email=request.query_params.get("email") or None,
            plan=request.query_params.get("plan") or None,
            limit=min(_int_param(request, "limit", 50), MAX_PAGE_SIZE),
            offset=_int_param(request, "offset", 0),
        )
        return Response(
            {"licenses": LicenseSerializer(licenses, many=True).data, "count": len(licenses)}
        )

    @extend_schema(
        operation_id="admin_create_license",
        summary="Create License",
        description="Issue a new license key.",
        tags=["Admin API"],
        parameters=[ADMIN_AUTH_PARAMETER],
        request=CreateLicenseRequestSerializer,
        responses={
            201: LicenseSerializer,
            400: {"description": "Invalid request"},
            404: {"description": "Product not found"},
        },
    )
    def post(self, request: Request) -> Response:
        serializer = CreateLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        metadata = LicenseMetadata.from_dict({"source": "admin", **data["metadata"]})
        result = get_engine().create_license(
            email=data["email"],
            plan=data["plan"],
            max_activations=data["max_activations"],
            expires_at=data["expires_at"],
            product_id=data["product_id"],
            metadata=metadata,
        )
        return Response(LicenseSerializer(result.license).data, status=status.HTTP_201_CREATED)


class LicenseDetailView(APIView):
    """View for reading, editing and deleting one license."""

    @extend_schema(
        operation_id="admin_get_license",
        summary="Get License",
        description="License details with every activation, including deactivated ones.",
        tags=["Admin API"],
        parameters=[ADMIN_AUTH_PARAMETER],
        responses={200: LicenseSerializer, 404: {"description": "License not found"}},
    )
    def get(self, request: Request, license_key: str) -> Response:
        return Response(LicenseSerializer(get_engine().get_license(license_key)).data)

    @extend_schema(
        operation_id="admin_update_license",
        summary="Update License",
        description="Change plan, max_activations, expires_at or email.",
        tags=["Admin API"],
        parameters=[ADMIN_AUTH_PARAMETER],
        request=UpdateLicenseRequestSerializer,
        responses={
            200: LicenseSerializer,
            400: {"description": "No fields to update"},
            404: {"description": "License not found"},
        },
    )
    def patch(self, request: Request, license_key: str) -> Response:
        serializer = UpdateLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        license = get_engine().update_license(
            license_key, dict(serializer.validated_data), ip_address=client_ip(request)
        )
        return Response(LicenseSerializer(license).data)

    @extend_schema(
        operation_id="admin_delete_license",
        summary="Delete License",
        description="Delete a license and its activations.",
        tags=["Admin API"],
        parameters=[ADMIN_AUTH_PARAMETER],
        responses={200: {"description": "Deleted"}, 404: {"description": "License not found"}},
    )
    def delete(self, request: Request, license_key: str) -> Response:
        get_engine().delete_license(license_key, ip_address=client_ip(request))
        return Response({"success": True, "message": "License deleted"})


class StatsView(APIView):
    """View for dashboard statistics."""

    @extend_schema(
        operation_id="admin_stats",
        summary="Statistics",
        description="License totals, counts per plan and the latest activations.",
        tags=["Admin API"],
        parameters=[ADMIN_AUTH_PARAMETER],
        responses={200: StatsSerializer},
    )
    def get(self, request: Request) -> Response:
        return Response(StatsSerializer(get_engine().stats()).data)


class ProductListCreateView(APIView):
    """View for listing and creating products."""

    @extend_schema(
        operation_id="admin_list_products",
        summary="List Products",
        tags=["Admin API"],
        parameters=[
            ADMIN_AUTH_PARAMETER,
            OpenApiParameter(
                name="include_inactive", type=bool, description="Include deleted products"
            ),
        ],
        responses={200: ProductSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        include_inactive = request.query_params.get("include_inactive", "").lower() in (
            "1",
            "true",
            "yes",
        )
        products = get_engine().list_products(include_inactive=include_inactive)
        return Response({"products": ProductSerializer(products, many=True).data})

    @extend_schema(
        operation_id="admin_create_product",
        summary="Create Product",
        tags=["Admin API"],
        parameters=[ADMIN_AUTH_PARAMETER],
        request=CreateProductRequestSerializer,
        responses={
            201: ProductSerializer,
            400: {"description": "Invalid request"},
            409: {"description": "Slug already taken"},
        },
    )
    def post(self, request: Request) -> Response:
        serializer = CreateProductRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = get_engine().create_product(CreateProductCommand(**serializer.validated_data))
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class ProductDetailView(APIView):
    """View for reading, editing and soft-deleting one product."""

    @extend_schema(
        operation_id="admin_get_product",
        summary="Get Product",
        tags=["Admin API"],
        parameters=[ADMIN_AUTH_PARAMETER],
        responses={200: ProductSerializer, 404: {"description": "Product not found"}},
    )
    def get(self, request: Request, product_id: uuid.UUID) -> Response:
        return Response(ProductSerializer(get_engine().get_product(product_id)).data)

    @extend_schema(
        operation_id="admin_update_product",
        summary="Update Product",
        tags=["Admin API"],
        parameters=[ADMIN_AUTH_PARAMETER],
        request=UpdateProductRequestSerializer,
        responses={200: ProductSerializer, 404: {"description": "Product not found"}},
    )
    def patch(self, request: Request, product_id: uuid.UUID) -> Response:
        serializer = UpdateProductRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = get_engine().update_product(
            UpdateProductCommand(product_id=product_id, changes=dict(serializer.validated_data))
        )
        return Response(ProductSerializer(product).data)

    @extend_schema(
        operation_id="admin_delete_product",
        summary="Delete Product",
        description="Soft delete: the product is hidden, its licenses keep working.",
        tags=["Admin API"],
        parameters=[ADMIN_AUTH_PARAMETER],
        responses={200: ProductSerializer, 404: {"description": "Product not found"}},
    )
    def delete(self, request: Request, product_id: uuid.UUID) -> Response:
        product = get_engine().deactivate_product(product_id)
        logger.info("Product deleted via admin API", extra={"product_id": str(product_id)})
        return Response(ProductSerializer(product).data)
