from dataclasses import dataclass
from typing import Dict, Optional

from ..types import PatchType, CascadeType, FieldValidation
from .selector import Selector, build_selector

QueryParams = Dict[str, Optional[str]]


@dataclass(frozen=True)
class PostParams:
    """Options for create and replace requests.

    Attributes:
      dry_run: Apply server-side dry-run, equivalent of `kubectl --dry-run=server`.
      field_manager: Name associated with the actor or entity that is making these changes.
      field_validation: How the server should react to unknown or duplicated fields.
    """
    dry_run: bool = False
    field_manager: Optional[str] = None
    field_validation: Optional[FieldValidation] = None

    def to_params(self) -> QueryParams:
        return {
            "dryRun": "All" if self.dry_run else None,
            "fieldManager": self.field_manager,
            "fieldValidation": self.field_validation.value if self.field_validation else None,
        }


@dataclass(frozen=True)
class PatchParams(PostParams):
    """Options for patch requests.

    Attributes:
      patch_type: Patch strategy, sent as the request `Content-Type`. Custom resources
        do not support `PatchType.STRATEGIC`.
      force: Re-acquire fields owned by other managers. Only used with `PatchType.APPLY`.
    """
    patch_type: PatchType = PatchType.MERGE
    force: bool = False

    def to_params(self) -> QueryParams:
        params = super().to_params()
        params["force"] = "true" if self.force and self.patch_type is PatchType.APPLY else None
        return params

    @property
    def content_type(self) -> str:
        return self.patch_type.value


@dataclass(frozen=True)
class ListParams:
    """Options for list, watch and delete-collection requests.

    Attributes:
      labels: Label selector, either already encoded or as a mapping. More details in `lightcr.operators`.
      fields: Field selector, either already encoded or as a mapping.
      resource_version: Only return changes (watch) or a snapshot (list) at this version.
      timeout: Server side timeout in seconds.
      limit: Maximum number of objects returned in a single response.
      continue_token: Token returned by a previous, limited, list call.
      allow_bookmarks: Ask the server to send `BOOKMARK` events. Only used when watching.
    """
    labels: Optional[Selector] = None
    fields: Optional[Selector] = None
    resource_version: Optional[str] = None
    timeout: Optional[int] = None
    limit: Optional[int] = None
    continue_token: Optional[str] = None
    allow_bookmarks: bool = False

    def to_params(self, watch: bool = False) -> QueryParams:
        params = {
            "labelSelector": build_selector(self.labels) if self.labels else None,
            "fieldSelector": build_selector(self.fields, for_fields=True) if self.fields else None,
            "resourceVersion": self.resource_version,
            "timeoutSeconds": self.timeout,
            "limit": self.limit,
            "continue": self.continue_token,
        }
        if watch and self.allow_bookmarks:
            params["allowWatchBookmarks"] = "true"
        return params


@dataclass(frozen=True)
class DeleteParams:
    """Options for delete and delete-collection requests.

    Attributes:
      dry_run: Apply server-side dry-run.
      grace_period: Seconds before the object is deleted. Zero means delete immediately.
      cascade: Whether and how garbage collection is performed on the dependents.
    """
    dry_run: bool = False
    grace_period: Optional[int] = None
    cascade: Optional[CascadeType] = None

    def to_params(self) -> QueryParams:
        return {
            "dryRun": "All" if self.dry_run else None,
            "gracePeriodSeconds": self.grace_period,
            "propagationPolicy": self.cascade.value if self.cascade else None,
        }
