"""Properties app package.

This app encapsulates property listings: cities, categories, properties,
rooms, unavailability blocks and peak season rates, together with the
availability search, month calendars and the tenant management endpoints.
"""
