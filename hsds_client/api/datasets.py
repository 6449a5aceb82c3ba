"""
Datasets API - dataset metadata, shape, type and value operations.
"""

import logging
from typing import Optional, Dict, Any, List, Union

from ..models import (
    Dataset,
    DatasetCreateRequest,
    DatasetValueRequest,
    Datasets,
    Shape,
    ShapeUpdateRequest,
    TypeSpec,
    shape_from_response,
    type_from_response,
)
from ._base import ResourceAPI

logger = logging.getLogger(__name__)


class DatasetsAPI(ResourceAPI):
    """
    API for dataset operations.

    Handles:
    - Dataset creation, listing and deletion
    - Shape queries and resizing
    - Reading values as JSON or binary, by hyperslab, query or points
    - Writing values
    """

    def _dataset_path(self, dataset_id: str, suffix: str = "") -> str:
        return "/datasets/" + self._segment(dataset_id, "dataset_id") + suffix

    def create(self, domain: str, request: DatasetCreateRequest) -> Dataset:
        """
        Create a new dataset.

        Args:
            domain: Domain path
            request: Type, shape and optional link of the new dataset
        """
        logger.info("Creating dataset in domain: %s", domain)
        body = request.to_dict()
        logger.debug("DatasetCreateRequest: %s", body)
        return self._http.request(
            "POST", "/datasets", params=self._domain_params(domain), json_data=body, parse=Dataset.from_dict
        )

    def list(self, domain: str) -> Datasets:
        """List the ids of all datasets in a domain."""
        return self._http.request("GET", "/datasets", params=self._domain_params(domain), parse=Datasets.from_dict)

    def get(self, domain: str, dataset_id: str) -> Dataset:
        """Get dataset metadata."""
        return self._http.request(
            "GET", self._dataset_path(dataset_id), params=self._domain_params(domain), parse=Dataset.from_dict
        )

    def delete(self, domain: str, dataset_id: str) -> Dict[str, Any]:
        """Delete a dataset."""
        logger.info("Deleting dataset %s in domain: %s", dataset_id, domain)
        return self._http.request("DELETE", self._dataset_path(dataset_id), params=self._domain_params(domain))

    def get_shape(self, domain: str, dataset_id: str) -> Shape:
        """Get the dataspace of a dataset."""
        return self._http.request(
            "GET",
            self._dataset_path(dataset_id, "/shape"),
            params=self._domain_params(domain),
            parse=shape_from_response,
        )

    def update_shape(
        self,
        domain: str,
        dataset_id: str,
        request: Union[ShapeUpdateRequest, List[int]],
    ) -> Dict[str, Any]:
        """
        Resize a dataset.

        Args:
            domain: Domain path
            dataset_id: Dataset UUID
            request: New dimensions, within the dataset's maxdims
        """
        if not isinstance(request, ShapeUpdateRequest):
            request = ShapeUpdateRequest(shape=list(request))
        logger.info("Resizing dataset %s to %s", dataset_id, request.shape)
        return self._http.request(
            "PUT",
            self._dataset_path(dataset_id, "/shape"),
            params=self._domain_params(domain),
            json_data=request.to_dict(),
        )

    def get_type(self, domain: str, dataset_id: str) -> TypeSpec:
        """Get the datatype of a dataset."""
        return self._http.request(
            "GET",
            self._dataset_path(dataset_id, "/type"),
            params=self._domain_params(domain),
            parse=type_from_response,
        )

    def write_values(self, domain: str, dataset_id: str, request: DatasetValueRequest) -> Dict[str, Any]:
        """
        Write values to a dataset.

        Args:
            domain: Domain path
            dataset_id: Dataset UUID
            request: Values plus optional start/stop/step or points selection
        """
        logger.debug("Writing values to dataset %s", dataset_id)
        return self._http.request(
            "PUT",
            self._dataset_path(dataset_id, "/value"),
            params=self._domain_params(domain),
            json_data=request.to_dict(),
        )

    def _value_params(
        self,
        domain: str,
        select: Optional[str],
        query: Optional[str],
        limit: Optional[int],
    ) -> Dict[str, Any]:
        params = self._domain_params(domain, select=select)
        if query:
            params["query"] = query
            params["Limit"] = limit
        return params

    def read_values(
        self,
        domain: str,
        dataset_id: str,
        select: Optional[str] = None,
        query: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> bytes:
        """
        Read values as raw binary.

        Args:
            domain: Domain path
            dataset_id: Dataset UUID
            select: Hyperslab selection (e.g. "[3:9,0:5:2]")
            query: Query condition on compound fields
            limit: Maximum number of query results
        """
        return self._http.request(
            "GET",
            self._dataset_path(dataset_id, "/value"),
            params=self._value_params(domain, select, query, limit),
            headers={"Accept": "application/octet-stream"},
            raw=True,
        )

    def read_values_json(
        self,
        domain: str,
        dataset_id: str,
        select: Optional[str] = None,
        query: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Read values as JSON. Same arguments as read_values."""
        return self._http.request(
            "GET",
            self._dataset_path(dataset_id, "/value"),
            params=self._value_params(domain, select, query, limit),
            headers={"Accept": "application/json"},
        )

    def read_points(self, domain: str, dataset_id: str, points: List[List[int]]) -> Dict[str, Any]:
        """
        Read individual elements.

        Args:
            domain: Domain path
            dataset_id: Dataset UUID
            points: Coordinates of the elements to read
        """
        return self._http.request(
            "POST",
            self._dataset_path(dataset_id, "/value"),
            params=self._domain_params(domain),
            json_data={"points": points},
        )
