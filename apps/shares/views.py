from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .serializers import (
    # Input serializers
    RecordPurchaseInputSerializer,
    ShareListQuerySerializer,
    # Output serializers
    SharePurchaseSerializer,
    MemberSharesSerializer,
    MemberSharesByIdSerializer,
    MonthlyRollupSerializer,
    GlobalStatsSerializer,
    MonthReportSerializer,
    AvailableMonthSerializer,
    # Response envelopes
    SharePurchaseResponseSerializer,
    SharePurchaseListResponseSerializer,
    MemberSharesResponseSerializer,
    MemberSharesByIdResponseSerializer,
    MonthlyRollupResponseSerializer,
    GlobalStatsResponseSerializer,
    MonthReportResponseSerializer,
    AvailableMonthsResponseSerializer,
    ErrorResponseSerializer,
)
from .services import Principal, ShareQueryFacade


def _facade(request):
    return ShareQueryFacade(Principal.from_user(request.user))


# =============================================================================
# Admin: ledger
# =============================================================================

@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('limit', OpenApiTypes.INT, description='Maximum number of purchases'),
    ],
    responses={200: SharePurchaseListResponseSerializer, 403: ErrorResponseSerializer},
    description="List every share purchase, newest first, with purchaser and recorder.",
    tags=['shares'],
)
@extend_schema(
    methods=['POST'],
    request=RecordPurchaseInputSerializer,
    responses={
        201: SharePurchaseResponseSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Record a share purchase for a member. totalAmount defaults to quantity * pricePerShare.",
    tags=['shares'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def share_purchases(request):
    facade = _facade(request)

    if request.method == 'POST':
        serializer = RecordPurchaseInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        purchase = facade.record_purchase(**serializer.validated_data)
        return Response({
            'success': True,
            'data': SharePurchaseSerializer(purchase).data,
        }, status=status.HTTP_201_CREATED)

    query = ShareListQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    purchases = facade.all_purchases(limit=query.validated_data.get('limit'))
    return Response({
        'success': True,
        'count': len(purchases),
        'data': SharePurchaseSerializer(purchases, many=True).data,
    })


@extend_schema(
    responses={200: GlobalStatsResponseSerializer, 403: ErrorResponseSerializer},
    description="Organisation totals, last 12 months of activity and the top 10 members.",
    tags=['shares'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def share_stats(request):
    stats = _facade(request).global_stats()
    return Response({
        'success': True,
        'data': GlobalStatsSerializer(stats).data,
    })


@extend_schema(
    responses={
        200: MonthReportResponseSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Purchases, statistics and top 5 contributors for one calendar month.",
    tags=['shares'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def month_statistics(request, month, year):
    report = _facade(request).month_statistics(month, year)
    return Response({
        'success': True,
        'data': MonthReportSerializer(report).data,
    })


@extend_schema(
    responses={200: AvailableMonthsResponseSerializer, 403: ErrorResponseSerializer},
    description="Months that have share purchases, newest first.",
    tags=['shares'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def available_months(request):
    months = _facade(request).available_months()
    return Response({
        'success': True,
        'data': AvailableMonthSerializer(months, many=True).data,
    })


# =============================================================================
# Per-member reads
# =============================================================================

@extend_schema(
    responses={
        200: MemberSharesByIdResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="A member's total shares and purchases.",
    tags=['shares'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def member_shares_by_id(request, user_id):
    result = _facade(request).member_shares(user_id)
    return Response({'success': True, **MemberSharesByIdSerializer(result).data})


@extend_schema(
    responses={
        200: MonthlyRollupResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="A member's purchases grouped by month, newest month first.",
    tags=['shares'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def member_monthly_shares_by_id(request, user_id):
    rollup = _facade(request).member_monthly_shares(user_id)
    return Response({
        'success': True,
        'count': len(rollup),
        'data': MonthlyRollupSerializer(rollup, many=True).data,
    })


@extend_schema(
    responses={200: MemberSharesResponseSerializer, 403: ErrorResponseSerializer},
    description="The current member's total shares and purchases.",
    tags=['member'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_shares(request):
    result = _facade(request).member_shares()
    return Response({'success': True, **MemberSharesSerializer(result).data})


@extend_schema(
    responses={200: MonthlyRollupResponseSerializer, 403: ErrorResponseSerializer},
    description="The current member's purchases grouped by month.",
    tags=['member'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_monthly_shares(request):
    rollup = _facade(request).member_monthly_shares()
    return Response({
        'success': True,
        'count': len(rollup),
        'data': MonthlyRollupSerializer(rollup, many=True).data,
    })
