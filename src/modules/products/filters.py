import django_filters

from modules.products.constants import ProductCategory, ProductStatus
from modules.products.models import Product


class ProductFilter(django_filters.FilterSet):
    category = django_filters.ChoiceFilter(choices=ProductCategory.choices)
    status = django_filters.ChoiceFilter(choices=ProductStatus.choices)
    farmer = django_filters.NumberFilter(field_name="farmer_id")
    minPrice = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    maxPrice = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    organic = django_filters.BooleanFilter()

    class Meta:
        model = Product
        fields = ["category", "status", "farmer", "minPrice", "maxPrice", "organic"]
