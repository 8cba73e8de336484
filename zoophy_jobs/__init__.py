"""ZooPhy job submission service: request validation and two-phase job start."""
