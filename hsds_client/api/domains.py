"""
Domains API - domain, folder and ACL operations.
"""

import logging
from typing import Optional, Dict, Any

from ..models import (
    Acl,
    AclUpdateRequest,
    Acls,
    Domain,
    DomainCreateRequest,
    DomainListing,
    acl_from_response,
)
from ._base import ResourceAPI

logger = logging.getLogger(__name__)


class DomainsAPI(ResourceAPI):
    """
    API for domain operations.

    Handles:
    - Domain and folder creation/deletion
    - Domain metadata
    - Folder listing
    - Access control lists
    """

    def create(self, domain: str, request: Optional[DomainCreateRequest] = None) -> Domain:
        """
        Create a new domain or folder.

        Args:
            domain: Domain path (e.g. "/home/user/myfile.h5")
            request: Creation parameters; a plain domain when omitted
        """
        logger.info("Creating domain: %s", domain)
        body = request.to_dict() if request else None
        logger.debug("HTTP PUT / with domain=%s body=%s", domain, body)
        return self._http.request(
            "PUT", "/", params=self._domain_params(domain), json_data=body, parse=Domain.from_dict
        )

    def create_folder(self, domain: str) -> Domain:
        """Create a folder (a domain without a root group)."""
        logger.info("Creating folder: %s", domain)
        return self.create(domain, DomainCreateRequest(folder=True))

    def get(self, domain: str) -> Domain:
        """Get domain metadata."""
        logger.info("Getting domain: %s", domain)
        return self._http.request("GET", "/", params=self._domain_params(domain), parse=Domain.from_dict)

    def delete(self, domain: str) -> Dict[str, Any]:
        """Delete a domain or an empty folder."""
        logger.info("Deleting domain: %s", domain)
        return self._http.request("DELETE", "/", params=self._domain_params(domain))

    def list(
        self,
        folder: Optional[str] = None,
        limit: Optional[int] = None,
        marker: Optional[str] = None,
    ) -> DomainListing:
        """
        List the domains in a folder.

        Args:
            folder: Folder path, with trailing slash (e.g. "/home/user/");
                top-level domains when omitted
            limit: Maximum number of entries to return
            marker: Name of the entry to continue listing after
        """
        logger.info("Listing domains in folder: %s", folder or "/")
        params = {"domain": folder, "Limit": limit, "Marker": marker}
        return self._http.request("GET", "/domains", params=params, parse=DomainListing.from_dict)

    def get_acls(self, domain: str) -> Acls:
        """Get all ACLs of a domain."""
        return self._http.request("GET", "/acls", params=self._domain_params(domain), parse=Acls.from_dict)

    def get_acl(self, domain: str, user: str) -> Acl:
        """Get the ACL of one user on a domain."""
        return self._http.request(
            "GET", "/acls/" + self._segment(user, "user"), params=self._domain_params(domain), parse=acl_from_response
        )

    def update_acl(self, domain: str, user: str, request: AclUpdateRequest) -> Dict[str, Any]:
        """Create or update the ACL of one user on a domain."""
        logger.info("Updating ACL for %s on domain: %s", user, domain)
        return self._http.request(
            "PUT",
            "/acls/" + self._segment(user, "user"),
            params=self._domain_params(domain),
            json_data=request.to_dict(),
        )
