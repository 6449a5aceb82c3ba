"""
Attributes API - attributes on groups, datasets and committed datatypes.
"""

import logging
from typing import Optional, Dict, Any, Union

from ..exceptions import InvalidParameterError
from ..models import Attribute, AttributeCreateRequest, Attributes, Collection
from ._base import ResourceAPI

logger = logging.getLogger(__name__)


class AttributesAPI(ResourceAPI):
    """
    API for attribute operations.

    ``collection`` selects the kind of object the attribute hangs off:
    "groups", "datasets" or "datatypes".
    """

    def _collection_path(self, collection: Union[Collection, str], obj_id: str) -> str:
        try:
            collection = Collection(collection)
        except ValueError:
            raise InvalidParameterError(
                f"Invalid collection {collection!r}, expected one of: "
                + ", ".join(c.value for c in Collection)
            )
        obj = self._segment(obj_id, "obj_id")
        return f"/{collection.value}/{obj}/attributes"

    def _attr_path(self, collection: Union[Collection, str], obj_id: str, attr_name: str) -> str:
        name = self._segment(attr_name, "attr_name")
        return f"{self._collection_path(collection, obj_id)}/{name}"

    def list(
        self,
        domain: str,
        collection: Union[Collection, str],
        obj_id: str,
        include_data: Optional[bool] = None,
        limit: Optional[int] = None,
        marker: Optional[str] = None,
    ) -> Attributes:
        """
        List the attributes of an object.

        Args:
            domain: Domain path
            collection: Object collection
            obj_id: Object UUID
            include_data: Include attribute values in the listing
            limit: Maximum number of attributes to return
            marker: Attribute name to continue listing after
        """
        path = self._collection_path(collection, obj_id)
        params = self._domain_params(
            domain,
            IncludeData=None if include_data is None else int(include_data),
            Limit=limit,
            Marker=marker,
        )
        return self._http.request("GET", path, params=params, parse=Attributes.from_dict)

    def put(
        self,
        domain: str,
        collection: Union[Collection, str],
        obj_id: str,
        attr_name: str,
        request: AttributeCreateRequest,
        replace: bool = False,
    ) -> Dict[str, Any]:
        """
        Create an attribute.

        Args:
            domain: Domain path
            collection: Object collection
            obj_id: Object UUID
            attr_name: Attribute name
            request: Type, shape and value of the attribute
            replace: Overwrite an existing attribute instead of failing with a conflict
        """
        path = self._attr_path(collection, obj_id, attr_name)
        logger.info("Writing attribute %s on %s", attr_name, obj_id)
        params = self._domain_params(domain, replace=1 if replace else None)
        return self._http.request("PUT", path, params=params, json_data=request.to_dict())

    def get(
        self,
        domain: str,
        collection: Union[Collection, str],
        obj_id: str,
        attr_name: str,
    ) -> Attribute:
        """Get an attribute with its value."""
        path = self._attr_path(collection, obj_id, attr_name)
        return self._http.request("GET", path, params=self._domain_params(domain), parse=Attribute.from_dict)

    def delete(
        self,
        domain: str,
        collection: Union[Collection, str],
        obj_id: str,
        attr_name: str,
    ) -> Dict[str, Any]:
        """Delete an attribute."""
        path = self._attr_path(collection, obj_id, attr_name)
        logger.info("Deleting attribute %s on %s", attr_name, obj_id)
        return self._http.request("DELETE", path, params=self._domain_params(domain))

    # ========== Per-collection shortcuts ==========

    def list_group_attributes(self, domain: str, group_id: str, **kwargs: Any) -> Attributes:
        return self.list(domain, Collection.GROUPS, group_id, **kwargs)

    def list_dataset_attributes(self, domain: str, dataset_id: str, **kwargs: Any) -> Attributes:
        return self.list(domain, Collection.DATASETS, dataset_id, **kwargs)

    def list_datatype_attributes(self, domain: str, datatype_id: str, **kwargs: Any) -> Attributes:
        return self.list(domain, Collection.DATATYPES, datatype_id, **kwargs)

    def put_group_attribute(
        self, domain: str, group_id: str, attr_name: str, request: AttributeCreateRequest, replace: bool = False
    ) -> Dict[str, Any]:
        return self.put(domain, Collection.GROUPS, group_id, attr_name, request, replace)

    def put_dataset_attribute(
        self, domain: str, dataset_id: str, attr_name: str, request: AttributeCreateRequest, replace: bool = False
    ) -> Dict[str, Any]:
        return self.put(domain, Collection.DATASETS, dataset_id, attr_name, request, replace)

    def put_datatype_attribute(
        self, domain: str, datatype_id: str, attr_name: str, request: AttributeCreateRequest, replace: bool = False
    ) -> Dict[str, Any]:
        return self.put(domain, Collection.DATATYPES, datatype_id, attr_name, request, replace)

    def get_group_attribute(self, domain: str, group_id: str, attr_name: str) -> Attribute:
        return self.get(domain, Collection.GROUPS, group_id, attr_name)

    def get_dataset_attribute(self, domain: str, dataset_id: str, attr_name: str) -> Attribute:
        return self.get(domain, Collection.DATASETS, dataset_id, attr_name)

    def get_datatype_attribute(self, domain: str, datatype_id: str, attr_name: str) -> Attribute:
        return self.get(domain, Collection.DATATYPES, datatype_id, attr_name)

    def delete_group_attribute(self, domain: str, group_id: str, attr_name: str) -> Dict[str, Any]:
        return self.delete(domain, Collection.GROUPS, group_id, attr_name)

    def delete_dataset_attribute(self, domain: str, dataset_id: str, attr_name: str) -> Dict[str, Any]:
        return self.delete(domain, Collection.DATASETS, dataset_id, attr_name)

    def delete_datatype_attribute(self, domain: str, datatype_id: str, attr_name: str) -> Dict[str, Any]:
        return self.delete(domain, Collection.DATATYPES, datatype_id, attr_name)
