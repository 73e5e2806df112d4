"""List declarations for dummies."""

from dashboard_service.core.pagination import OrderKey, ResourceDefinition, SortDirection

DUMMY_RESOURCE = ResourceDefinition(
    name="dummies",
    filterable_fields=("name", "description"),
    searchable_fields=("name", "description"),
    sortable_fields=("id", "name", "description", "created_at", "updated_at"),
    fallback_order=(OrderKey("created_at", SortDirection.DESC),),
)
