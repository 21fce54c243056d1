"""Compatibility processing: extraction, classification, rules, power, suggestions."""
