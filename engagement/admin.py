from django.contrib import admin

from .models import Favorite, Review


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = ("owner_id", "product", "created_at")


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("product", "author_name", "rating", "created_at")
    list_filter = ("rating",)
