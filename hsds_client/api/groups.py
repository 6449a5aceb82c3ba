"""
Groups API - group operations.
"""

import logging
from typing import Optional, Dict, Any

from ..models import Group, GroupCreateRequest, Groups
from ._base import ResourceAPI

logger = logging.getLogger(__name__)


class GroupsAPI(ResourceAPI):
    """API for group operations within a domain."""

    def create(self, domain: str, request: Optional[GroupCreateRequest] = None) -> Group:
        """
        Create a new group.

        Args:
            domain: Domain path
            request: Optionally links the new group into a parent group
        """
        logger.info("Creating group in domain: %s", domain)
        body = request.to_dict() if request else None
        logger.debug("HTTP POST /groups with domain=%s body=%s", domain, body)
        return self._http.request(
            "POST", "/groups", params=self._domain_params(domain), json_data=body, parse=Group.from_dict
        )

    def list(self, domain: str) -> Groups:
        """List the ids of all groups in a domain."""
        logger.info("Listing groups in domain: %s", domain)
        return self._http.request("GET", "/groups", params=self._domain_params(domain), parse=Groups.from_dict)

    def get(self, domain: str, group_id: str, get_alias: bool = False) -> Group:
        """
        Get group metadata.

        Args:
            domain: Domain path
            group_id: Group UUID
            get_alias: Include the paths the group is reachable by
        """
        logger.info("Getting group %s in domain: %s", group_id, domain)
        params = self._domain_params(domain, getalias=1 if get_alias else None)
        path = "/groups/" + self._segment(group_id, "group_id")
        return self._http.request("GET", path, params=params, parse=Group.from_dict)

    def delete(self, domain: str, group_id: str) -> Dict[str, Any]:
        """Delete a group."""
        logger.info("Deleting group %s in domain: %s", group_id, domain)
        path = "/groups/" + self._segment(group_id, "group_id")
        return self._http.request("DELETE", path, params=self._domain_params(domain))
