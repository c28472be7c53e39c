"""Backend services for the WageCalc payroll calculator."""
