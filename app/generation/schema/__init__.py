"""Schema records for workout generation: context, catalog, feedback and output."""
