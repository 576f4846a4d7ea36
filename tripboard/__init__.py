import tripboard.utils.i18n  # noqa: F401
