"""Terminal runtime: input decoding, screen control, config and persistence."""
