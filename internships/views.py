from django.conf import settings
from django.db.models import Count, F, Q
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from intern_track.pagination import int_param
from .filters import InternshipFilter, InternshipSearchFilter, skills_query
from .models import Internship
from .serializers import InternshipSerializer, InternshipListSerializer

SORTABLE_FIELDS = (
    "posted_at", "application_deadline", "views", "title", "company",
    "stipend_min", "applications_count", "start_date",
)


class InternshipViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Public discovery of internships. Only active, approved internships whose
    deadline has not passed are visible here.
    """
    permission_classes = [AllowAny]

    def get_queryset(self):
        return Internship.objects.public().select_related("recruiter")

    @property
    def filterset_class(self):
        if self.action == "search":
            return InternshipSearchFilter
        return InternshipFilter

    def get_serializer_class(self):
        if self.action == "retrieve":
            return InternshipSerializer
        return InternshipListSerializer

    def get_ordering(self):
        sort_by = self.request.query_params.get("sort_by", "posted_at")
        if sort_by not in SORTABLE_FIELDS:
            sort_by = "posted_at"
        sort_order = self.request.query_params.get("sort_order", "desc")
        return [sort_by if sort_order == "asc" else f"-{sort_by}", "-id"]

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset()).order_by(*self.get_ordering())
        page = self.paginate_queryset(queryset)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request, *args, **kwargs):
        internship = self.get_object()
        Internship.objects.filter(pk=internship.pk).update(views=F("views") + 1)
        internship.refresh_from_db(fields=["views"])
        return Response({"success": True, "internship": self.get_serializer(internship).data})

    @action(detail=False, methods=["get"])
    def search(self, request):
        queryset = self.filter_queryset(self.get_queryset()).order_by("-posted_at", "-id")
        page = self.paginate_queryset(queryset)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @action(detail=False, methods=["get"])
    def featured(self, request):
        limit = int_param(request, "limit", 6, maximum=settings.MAX_PAGE_SIZE)
        queryset = self.get_queryset().order_by("-views", "-posted_at")[:limit]
        return Response({"success": True, "internships": self.get_serializer(queryset, many=True).data})

    @action(detail=False, methods=["get"])
    def stats(self, request):
        listed = Internship.objects.listed()

        def top(field):
            rows = (
                listed.values(field)
                .annotate(count=Count("id"))
                .order_by("-count", field)[:10]
            )
            return [{"name": row[field], "count": row["count"]} for row in rows]

        return Response({
            "success": True,
            "stats": {
                "total_internships": listed.count(),
                "active_internships": Internship.objects.public().count(),
                "remote_internships": listed.filter(work_type__in=["remote", "hybrid"]).count(),
                "paid_internships": listed.filter(is_paid=True).count(),
                "top_industries": top("industry"),
                "top_locations": top("location"),
            },
        })

    @action(detail=True, methods=["get"])
    def similar(self, request, pk=None):
        internship = self.get_object()
        limit = int_param(request, "limit", 4, maximum=settings.MAX_PAGE_SIZE)

        match = (
            Q(industry=internship.industry)
            | Q(location=internship.location)
            | skills_query(internship.skills)
        )

        queryset = (
            self.get_queryset()
            .exclude(pk=internship.pk)
            .filter(match)
            .order_by("-posted_at")[:limit]
        )
        return Response({"success": True, "internships": self.get_serializer(queryset, many=True).data})
