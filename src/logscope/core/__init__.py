"""Pure log analytics pipeline: models, stages and ports."""
