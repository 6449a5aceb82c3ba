"""
HSDS API Client Package.

Structure:
    - client.py: HsdsClient / AsyncHsdsClient facades
    - _http.py: Sync (requests) and async (httpx) transports with error mapping
    - domains.py: Domains, folders and ACLs
    - groups.py: Groups
    - links.py: Links between groups and objects
    - datasets.py: Datasets, shapes and values
    - datatypes.py: Committed datatypes
    - attributes.py: Attributes on groups, datasets and datatypes

Usage:
    from hsds_client.api import HsdsClient
    from hsds_client.auth import BasicAuth

    client = HsdsClient("http://localhost:5101", BasicAuth("admin", "admin"))
    domain = client.domains.get("/home/admin/test.h5")
    links = client.links.list("/home/admin/test.h5", domain.root)
"""

from .client import HsdsClient, AsyncHsdsClient, get_client
from ._http import HTTPClient, AsyncHTTPClient
from .domains import DomainsAPI
from .groups import GroupsAPI
from .links import LinksAPI
from .datasets import DatasetsAPI
from .datatypes import DatatypesAPI
from .attributes import AttributesAPI

__all__ = [
    # Main clients
    "HsdsClient",
    "AsyncHsdsClient",
    "get_client",
    # HTTP layer
    "HTTPClient",
    "AsyncHTTPClient",
    # Resource APIs
    "DomainsAPI",
    "GroupsAPI",
    "LinksAPI",
    "DatasetsAPI",
    "DatatypesAPI",
    "AttributesAPI",
]
