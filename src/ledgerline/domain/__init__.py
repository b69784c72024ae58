"""Domain layer for ledgerline application."""

# Services are imported lazily: the database layer imports domain entities,
# and the services import the database layer.
_SERVICES = {
    "TransactionService": "ledgerline.domain.transaction",
    "ClassificationEngine": "ledgerline.domain.classification",
    "ClassificationService": "ledgerline.domain.classification",
    "CSVImportService": "ledgerline.domain.csv_import",
    "RuleService": "ledgerline.domain.rules",
    "parse_csv_file": "ledgerline.domain.csv_parser",
    "parse_csv_text": "ledgerline.domain.csv_parser",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
