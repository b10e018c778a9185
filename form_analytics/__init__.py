# ==============================================
# Form Response Analytics
# ==============================================
#
# Package Structure (3 Topics + Orchestrator):
#
# form_analytics/
# ├── normalization/         # Topic 1: Typed records, value tagging, key variants
# ├── analysis/              # Topic 2: Field analytics, drop-off, trend, growth
# ├── storage/               # Topic 3: Fetch forms/submissions/views from MongoDB
# ├── aggregation_engine.py  # Orchestrator: schema + records -> statistics
# ├── service.py             # Store -> engine wiring, fallback to empty stats
# ├── export.py              # CSV / XLSX / JSON response export
# ├── errors.py              # Exception hierarchy
# ├── config.py              # Configuration management
# └── cli.py                 # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
