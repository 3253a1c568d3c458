"""Domain layer: exceptions, value types and naming rules."""
