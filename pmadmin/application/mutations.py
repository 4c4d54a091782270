"""MutationCommand factories, one per backend write operation."""
from __future__ import annotations

from pmadmin.application.mutation import MutationCommand
from pmadmin.core.schema import MutationEnvelope
from pmadmin.infrastructure.api_client import AdminApiClient, get_api_client
from pmadmin.infrastructure.notifications import NotificationSink

# public name -> AdminApiClient coroutine
MUTATIONS: dict[str, str] = {
    "create-member": "create_member",
    "update-member": "update_member",
    "delete-member": "delete_member",
    "create-organization": "create_organization",
    "update-organization": "update_organization",
    "delete-organization": "delete_organization",
    "change-organization-status": "change_organization_status",
    "create-notice": "create_notice",
    "edit-notice": "edit_notice",
    "delete-notice": "delete_notice",
    "create-project": "create_project",
    "update-project": "update_project",
    "delete-project": "delete_project",
    "update-project-management-step": "update_project_management_step",
    "create-progress-step": "create_progress_step",
    "update-progress-step": "update_progress_step",
    "delete-progress-step": "delete_progress_step",
    "update-progress-step-schedule": "update_progress_step_schedule",
    "update-progress-step-order": "update_progress_step_order",
}


def build_mutation(
    name: str,
    *,
    client: AdminApiClient | None = None,
    sink: NotificationSink | None = None,
) -> MutationCommand[MutationEnvelope]:
    try:
        method = MUTATIONS[name]
    except KeyError:
        raise KeyError(f"unknown mutation '{name}'") from None
    api = client or get_api_client()
    return MutationCommand(getattr(api, method), sink=sink)
