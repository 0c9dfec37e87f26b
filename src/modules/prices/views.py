"""Price API views.

Exposes the ``PriceService`` via HTTP using a DRF ViewSet:

- ``POST   /api/prices``       create a price (201).
- ``GET    /api/prices``       applicable prices for productId/brandId/date (200).
- ``DELETE /api/prices/{id}``  delete a price (204).

Views only parse input and serialize output.  Domain exceptions propagate
to ``modules.core.exception_handler``, which renders every error response.
"""

from __future__ import annotations

import structlog
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.prices.dtos import (
    CreatePriceDTO,
    PriceQueryDTO,
    field_errors,
    parse_price_date,
)
from modules.prices.exceptions import InvalidPriceParameters, PriceValidationError
from modules.prices.models import Price
from modules.prices.repositories.django_repository import PriceDjangoRepository
from modules.prices.serializers import PriceSerializer
from modules.prices.services import PriceService

logger = structlog.get_logger(__name__)


class PriceViewSet(GenericViewSet):
    """ViewSet for Price create / lookup / delete.

    Uses ``PriceService`` with ``PriceDjangoRepository`` (DIP).  All ORM
    access goes through the service/repository layer.
    """

    queryset = Price.objects.all()
    serializer_class = PriceSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = PriceService(repository=PriceDjangoRepository())

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @extend_schema(
        summary="Get applicable prices",
        description=(
            "Prices valid for the product and brand at the given date, "
            "highest priority first. The first element is the applicable price."
        ),
        parameters=[
            OpenApiParameter("productId", OpenApiTypes.INT, required=True),
            OpenApiParameter("brandId", OpenApiTypes.INT, required=True),
            OpenApiParameter(
                "date",
                OpenApiTypes.STR,
                required=True,
                description="ISO 8601 local date-time, e.g. 2020-06-14T10:00:00",
            ),
        ],
        responses={
            200: PriceSerializer(many=True),
            400: OpenApiResponse(description="Invalid parameters or date"),
            404: OpenApiResponse(description="No applicable price"),
        },
    )
    def list(self, request: Request) -> Response:
        """GET /api/prices?productId=&brandId=&date="""
        params = request.query_params
        try:
            query = PriceQueryDTO.model_validate(
                {"productId": params.get("productId"), "brandId": params.get("brandId")}
            )
        except PydanticValidationError as exc:
            raise InvalidPriceParameters(field_errors(exc)) from exc

        at = parse_price_date(params.get("date"))
        prices = self._service.get_applicable_prices(
            query.product_id, query.brand_id, at
        )
        return Response(PriceSerializer(prices, many=True).data)

    # ------------------------------------------------------------------
    # Create / Destroy
    # ------------------------------------------------------------------

    @extend_schema(
        summary="Create a price",
        request=OpenApiTypes.OBJECT,
        responses={
            201: PriceSerializer,
            400: OpenApiResponse(description="Invalid fields or duplicate price"),
            500: OpenApiResponse(description="Storage failure"),
        },
    )
    def create(self, request: Request) -> Response:
        """POST /api/prices"""
        data = request.data
        if not isinstance(data, dict):
            raise PriceValidationError(message="The request body must be a JSON object.")

        logger.info("price.create_requested", payload=dict(data))
        try:
            dto = CreatePriceDTO.model_validate(data)
        except PydanticValidationError as exc:
            raise PriceValidationError(field_errors(exc)) from exc

        price = self._service.create_price(dto)
        return Response(PriceSerializer(price).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Delete a price by ID",
        responses={
            204: None,
            404: OpenApiResponse(description="Price not found"),
        },
    )
    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/prices/{pk}"""
        try:
            price_id = int(pk or "")
        except ValueError:
            price_id = 0
        if price_id < 1:
            raise InvalidPriceParameters({"id": "id must be a positive integer"})

        self._service.delete_price(price_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
