"""Route modules mounted by :mod:`ginko_markup.main`."""
