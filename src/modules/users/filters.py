import django_filters
from django.db.models import Q

from modules.users.models import User


class UserFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    email = django_filters.CharFilter(field_name="email", lookup_expr="iexact")
    role = django_filters.CharFilter(field_name="role", lookup_expr="exact")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = User
        fields = ["name", "email", "role", "search"]

    def filter_search(self, queryset, name, value):
        term = value.strip()
        if not term:
            return queryset
        return queryset.filter(Q(name__icontains=term) | Q(email__icontains=term))
