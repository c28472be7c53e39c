"""WageCalc: Brazilian payroll deduction calculator."""
