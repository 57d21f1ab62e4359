import django_filters

from modules.pricing.models import SpecialPrice


class SpecialPriceFilter(django_filters.FilterSet):
    user_id = django_filters.UUIDFilter(field_name="user_id")
    product_id = django_filters.UUIDFilter(field_name="product_id")
    is_active = django_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = SpecialPrice
        fields = ["user_id", "product_id", "is_active"]
