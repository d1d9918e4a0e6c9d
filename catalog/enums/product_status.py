from enum import Enum

class ProductStatus(str, Enum):
    pending_enrichment = "pending_enrichment"
    enriched = "enriched"
    failed = "failed"
    archived = "archived"
