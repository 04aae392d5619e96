"""Storage engine layer.

This module persists entity rows as one JSON document per entity type.
It powers the JsonDB facade and the inspection CLI.
"""
