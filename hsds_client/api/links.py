"""
Links API - link operations on groups.
"""

import logging
from typing import Optional, Dict, Any

from ..models import Link, LinkCreateRequest, Links, link_from_response
from ._base import ResourceAPI

logger = logging.getLogger(__name__)


class LinksAPI(ResourceAPI):
    """
    API for links between a group and its members.

    Handles:
    - Listing with pagination
    - Hard, soft and external link creation
    - Link lookup and deletion
    """

    def _link_path(self, group_id: str, link_name: str) -> str:
        group = self._segment(group_id, "group_id")
        name = self._segment(link_name, "link_name")
        return f"/groups/{group}/links/{name}"

    def list(
        self,
        domain: str,
        group_id: str,
        limit: Optional[int] = None,
        marker: Optional[str] = None,
    ) -> Links:
        """
        List the links in a group.

        Args:
            domain: Domain path
            group_id: Group UUID
            limit: Maximum number of links to return
            marker: Link name to continue listing after
        """
        path = "/groups/" + self._segment(group_id, "group_id") + "/links"
        logger.info("Listing links of group %s in domain: %s", group_id, domain)
        params = self._domain_params(domain, Limit=limit, Marker=marker)
        return self._http.request("GET", path, params=params, parse=Links.from_dict)

    def create(
        self,
        domain: str,
        group_id: str,
        link_name: str,
        request: LinkCreateRequest,
    ) -> Dict[str, Any]:
        """
        Create a link in a group.

        Args:
            domain: Domain path
            group_id: Group UUID
            link_name: Name of the link
            request: Link target
        """
        path = self._link_path(group_id, link_name)
        logger.info("Creating link %s in group %s", link_name, group_id)
        return self._http.request("PUT", path, params=self._domain_params(domain), json_data=request.to_dict())

    def get(self, domain: str, group_id: str, link_name: str) -> Link:
        """Get a link by name."""
        path = self._link_path(group_id, link_name)
        return self._http.request("GET", path, params=self._domain_params(domain), parse=link_from_response)

    def delete(self, domain: str, group_id: str, link_name: str) -> Dict[str, Any]:
        """Delete a link. The target object itself is left alone."""
        path = self._link_path(group_id, link_name)
        logger.info("Deleting link %s in group %s", link_name, group_id)
        return self._http.request("DELETE", path, params=self._domain_params(domain))

    def create_hard_link(
        self,
        domain: str,
        group_id: str,
        link_name: str,
        target_id: str,
    ) -> Dict[str, Any]:
        """Link ``link_name`` to the object with UUID ``target_id``."""
        self._require(target_id, "target_id")
        return self.create(domain, group_id, link_name, LinkCreateRequest(id=target_id))

    def create_soft_link(
        self,
        domain: str,
        group_id: str,
        link_name: str,
        target_path: str,
    ) -> Dict[str, Any]:
        """Link ``link_name`` to an HDF5 path in the same domain."""
        self._require(target_path, "target_path")
        return self.create(domain, group_id, link_name, LinkCreateRequest(h5path=target_path))

    def create_external_link(
        self,
        domain: str,
        group_id: str,
        link_name: str,
        target_path: str,
        target_domain: str,
    ) -> Dict[str, Any]:
        """Link ``link_name`` to an HDF5 path in another domain."""
        self._require(target_path, "target_path")
        self._require(target_domain, "target_domain")
        return self.create(
            domain,
            group_id,
            link_name,
            LinkCreateRequest(h5path=target_path, h5domain=target_domain),
        )
