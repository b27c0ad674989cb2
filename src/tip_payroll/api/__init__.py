"""HTTP adapter for the tip payroll engine."""
