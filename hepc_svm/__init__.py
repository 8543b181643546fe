"""Hepatitis C classification from blood-test biomarkers with a radial SVM."""

__version__ = "0.1.0"
