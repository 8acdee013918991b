from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "company", "price", "featured", "created_at")
    list_filter = ("featured",)
    search_fields = ("name", "company")
