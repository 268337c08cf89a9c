"""Extension-based file classifier."""

from mediascan.core.registry import CategoryRegistry
from mediascan.models.core import FileRecord


def classify(record: FileRecord, registry: CategoryRegistry) -> FileRecord:
    """Return a copy of *record* with its category assigned.

    The category is looked up from the record's lowercase extension; files
    whose extension no category claims become UNCLASSIFIED.

    Args:
        record: Record produced by the scanner.
        registry: Registry to look the extension up in.

    Returns:
        The classified record. The input is left untouched.
    """
    category = registry.category_for(record.extension)
    return record.model_copy(update={"category": category})
