"""Editorial URL configuration (mounted under the locale prefix)."""

from django.urls import path

from . import views

app_name = "editorial"

urlpatterns = [
    path("", views.HomeView.as_view(), name="home"),
    path("journal/", views.JournalIndexView.as_view(), name="journal-index"),
    path("journal/<slug:slug>/", views.JournalDetailView.as_view(), name="journal-detail"),
]
