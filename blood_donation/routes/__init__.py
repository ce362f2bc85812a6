"""HTTP blueprints for donor and donation-camp accounts."""
