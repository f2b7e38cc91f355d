"""Editorial exceptions."""


class HomepageIncomplete(Exception):
    """The homepage cannot render because modules are missing for a locale."""

    def __init__(self, locale, missing_types):
        self.locale = locale
        self.missing_types = list(missing_types)
        super().__init__(f"Missing homepage modules for {locale}: {', '.join(self.missing_types)}")
