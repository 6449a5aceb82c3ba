"""
Datatypes API - committed datatype operations.
"""

import logging
from typing import Dict, Any

from ..models import Datatype, DatatypeCommitRequest, Datatypes
from ._base import ResourceAPI

logger = logging.getLogger(__name__)


class DatatypesAPI(ResourceAPI):
    """API for committed (named) datatypes."""

    def commit(self, domain: str, request: DatatypeCommitRequest) -> Datatype:
        """
        Commit a datatype to a domain.

        Args:
            domain: Domain path
            request: Type definition and optional link into a group
        """
        logger.info("Committing datatype in domain: %s", domain)
        return self._http.request(
            "POST",
            "/datatypes",
            params=self._domain_params(domain),
            json_data=request.to_dict(),
            parse=Datatype.from_dict,
        )

    def list(self, domain: str) -> Datatypes:
        """List the ids of all committed datatypes in a domain."""
        return self._http.request(
            "GET", "/datatypes", params=self._domain_params(domain), parse=Datatypes.from_dict
        )

    def get(self, domain: str, datatype_id: str) -> Datatype:
        """Get a committed datatype."""
        path = "/datatypes/" + self._segment(datatype_id, "datatype_id")
        return self._http.request(
            "GET", path, params=self._domain_params(domain), parse=Datatype.from_dict
        )

    def delete(self, domain: str, datatype_id: str) -> Dict[str, Any]:
        """Delete a committed datatype."""
        path = "/datatypes/" + self._segment(datatype_id, "datatype_id")
        logger.info("Deleting datatype %s in domain: %s", datatype_id, domain)
        return self._http.request("DELETE", path, params=self._domain_params(domain))
