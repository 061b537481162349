"""ATS engine package.

Normalizes job postings from applicant-tracking systems into one record shape:
- `models.py` defines the canonical JobRecord and its enums.
- `normalize.py`, `compensation.py` and `dates.py` hold the deterministic
  classifiers and parsers every adapter shares.
- `sources/` contains one adapter per ATS provider.
"""
