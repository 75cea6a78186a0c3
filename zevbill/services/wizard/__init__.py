"""Selection and validation engine behind the bill configuration wizards."""
