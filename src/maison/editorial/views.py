"""Editorial views: homepage and journal."""

import logging

from django.http import Http404
from django.shortcuts import render

from maison.catalog.views import LocalizedTemplateView

from . import data
from .exceptions import HomepageIncomplete

logger = logging.getLogger(__name__)


class HomeView(LocalizedTemplateView):
    template_name = "editorial/home.html"

    def get(self, request, *args, **kwargs):
        locale = self.get_locale()
        try:
            content = data.get_homepage_content(locale)
        except HomepageIncomplete as exc:
            logger.error("Homepage unavailable for %s: missing %s", locale, ", ".join(exc.missing_types))
            return render(request, "editorial/home_unavailable.html", {"missing": exc.missing_types}, status=503)
        return self.render_to_response(self.get_context_data(home=content, **kwargs))


class JournalIndexView(LocalizedTemplateView):
    template_name = "editorial/journal_index.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        locale = self.get_locale()
        entries = data.get_journal_entries(locale)
        category = self.request.GET.get("category")
        if category:
            entries = [entry for entry in entries if entry.category == category]
        context["entries"] = entries
        context["categories"] = data.get_journal_categories(locale)
        context["active_category"] = category
        return context


class JournalDetailView(LocalizedTemplateView):
    template_name = "editorial/journal_detail.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        entry = data.get_journal_entry(self.get_locale(), self.kwargs["slug"])
        if entry is None:
            raise Http404("Journal entry not found")
        context["entry"] = entry
        return context
