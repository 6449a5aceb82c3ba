"""
Tests for request and response models.
"""

import dataclasses

import pytest

from hsds_client.models import (
    H5T_VARIABLE,
    AclUpdateRequest,
    Attribute,
    AttributeCreateRequest,
    DataType,
    Dataset,
    DatasetCreateRequest,
    DatasetValueRequest,
    Domain,
    DomainClass,
    DomainCreateRequest,
    DomainListing,
    Group,
    GroupCreateRequest,
    LinkClass,
    LinkCreateRequest,
    LinkRequest,
    Links,
    Shape,
    ShapeUpdateRequest,
    link_from_response,
)


class TestDataType:
    """Tests for HDF5 type definitions."""

    def test_variable_utf8(self):
        assert DataType.variable_utf8().to_dict() == {
            "class": "H5T_STRING",
            "charSet": "H5T_CSET_UTF8",
            "strPad": "H5T_STR_NULLPAD",
            "length": H5T_VARIABLE,
        }

    def test_fixed_ascii(self):
        data = DataType.fixed_ascii(12).to_dict()
        assert data["charSet"] == "H5T_CSET_ASCII"
        assert data["length"] == 12

    def test_compound_keeps_fields(self):
        compound = {
            "class": "H5T_COMPOUND",
            "fields": [
                {"name": "temp", "type": "H5T_IEEE_F32LE"},
                {"name": "pressure", "type": "H5T_IEEE_F32LE"},
            ],
        }
        assert DataType.from_dict(compound).to_dict() == compound

    def test_unknown_keys_preserved(self):
        array = {"class": "H5T_ARRAY", "base": "H5T_STD_I8LE", "dims": [3]}
        parsed = DataType.from_dict(array)
        assert parsed.extra == {"dims": [3]}
        assert parsed.to_dict() == array

    def test_missing_class(self):
        with pytest.raises(KeyError):
            DataType.from_dict({"base": "H5T_STD_I8LE"})


class TestDomain:
    """Tests for domain responses."""

    def test_from_dict(self):
        domain = Domain.from_dict({
            "root": "g-1",
            "owner": "admin",
            "class": "domain",
            "created": 1700000000.5,
            "lastModified": 1700000100.0,
            "hrefs": [{"href": "http://hsds/", "rel": "self"}],
        })
        assert domain.root == "g-1"
        assert domain.domain_class == DomainClass.DOMAIN
        assert domain.last_modified == 1700000100.0
        assert domain.hrefs[0].rel == "self"
        assert not domain.is_folder

    def test_folder_has_no_root(self):
        folder = Domain.from_dict({"owner": "admin", "class": "folder"})
        assert folder.is_folder
        assert folder.root is None

    def test_acls(self):
        domain = Domain.from_dict({"acls": {"admin": {"read": True, "update": False}}})
        assert domain.acls["admin"].user_name == "admin"
        assert domain.acls["admin"].read is True

    def test_listing(self):
        listing = DomainListing.from_dict({
            "domains": [
                {"name": "/home/admin/a.h5", "class": "domain", "owner": "admin"},
                {"name": "/home/admin/sub", "class": "folder"},
            ]
        })
        assert [d.name for d in listing.domains] == ["/home/admin/a.h5", "/home/admin/sub"]
        assert listing.domains[1].domain_class == DomainClass.FOLDER

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Domain().root = "g-2"


class TestGroupAndLinks:
    """Tests for group and link responses."""

    def test_group(self):
        group = Group.from_dict({"id": "g-1", "linkCount": 2, "attributeCount": 0, "alias": ["/"]})
        assert group.link_count == 2
        assert group.attribute_count == 0
        assert group.alias == ["/"]

    def test_links(self):
        links = Links.from_dict({
            "links": [
                {"title": "data", "class": "H5L_TYPE_HARD", "id": "d-1", "collection": "datasets"},
                {"title": "alias", "class": "H5L_TYPE_SOFT", "h5path": "/data"},
                {"title": "ext", "class": "H5L_TYPE_EXTERNAL", "h5path": "/x", "h5domain": "/other.h5"},
            ]
        })
        hard, soft, ext = links.links
        assert hard.link_class == LinkClass.HARD and hard.id == "d-1"
        assert soft.link_class == LinkClass.SOFT and soft.h5path == "/data"
        assert ext.h5domain == "/other.h5"

    def test_single_link_response(self):
        link = link_from_response({
            "link": {"title": "data", "class": "H5L_TYPE_HARD", "id": "d-1"},
            "created": 1700000000.0,
        })
        assert link.title == "data"
        assert link.created == 1700000000.0


class TestDatasetAndAttribute:
    """Tests for dataset and attribute responses."""

    def test_dataset_with_predefined_type(self):
        dataset = Dataset.from_dict({
            "id": "d-1",
            "type": "H5T_STD_I32LE",
            "shape": {"class": "H5S_SIMPLE", "dims": [10], "maxdims": [0]},
        })
        assert dataset.type == "H5T_STD_I32LE"
        assert dataset.shape.dims == [10]
        assert dataset.shape.maxdims == [0]

    def test_dataset_with_type_definition(self):
        dataset = Dataset.from_dict({
            "id": "d-1",
            "type": {"class": "H5T_INTEGER", "base": "H5T_STD_I64LE"},
            "shape": {"class": "H5S_SCALAR"},
        })
        assert isinstance(dataset.type, DataType)
        assert dataset.type.base == "H5T_STD_I64LE"
        assert dataset.shape.dims is None

    def test_attribute_value_passthrough(self):
        attr = Attribute.from_dict({
            "name": "units",
            "type": DataType.variable_utf8().to_dict(),
            "shape": {"class": "H5S_SCALAR"},
            "value": "kelvin",
        })
        assert attr.value == "kelvin"
        assert attr.type.char_set == "H5T_CSET_UTF8"


class TestRequests:
    """Tests for request serialization."""

    def test_domain_create(self):
        assert DomainCreateRequest().to_dict() == {}
        assert DomainCreateRequest(folder=True).to_dict() == {"folder": 1}

    def test_group_create(self):
        assert GroupCreateRequest().to_dict() == {}
        request = GroupCreateRequest(link=LinkRequest("g-1", "child"))
        assert request.to_dict() == {"link": {"id": "g-1", "name": "child"}}

    def test_dataset_create_omits_unset(self):
        request = DatasetCreateRequest(type="H5T_IEEE_F64LE", shape=[10, 10])
        assert request.to_dict() == {"type": "H5T_IEEE_F64LE", "shape": [10, 10]}

    def test_dataset_create_extensible(self):
        request = DatasetCreateRequest(type="H5T_STD_I32LE", shape=[10], maxdims=[0])
        assert request.to_dict()["maxdims"] == [0]

    def test_from_hsds_type_string(self):
        request = DatasetCreateRequest.from_hsds_type("H5T_STRING", [5])
        assert request.type == DataType.variable_ascii()
        assert request.shape == [5]

    def test_from_hsds_type_predefined(self):
        request = DatasetCreateRequest.from_hsds_type("H5T_STD_U8LE", [2, 3])
        assert request.to_dict() == {"type": "H5T_STD_U8LE", "shape": [2, 3]}

    def test_from_hsds_type_with_link(self):
        request = DatasetCreateRequest.from_hsds_type_with_link("H5T_STD_I32LE", [4], "g-1", "ints")
        assert request.to_dict()["link"] == {"id": "g-1", "name": "ints"}

    def test_value_request_hyperslab(self):
        request = DatasetValueRequest(value=[1, 2], start=[0], stop=[2])
        assert request.to_dict() == {"start": [0], "stop": [2], "value": [1, 2]}

    def test_value_request_base64(self):
        assert DatasetValueRequest(value_base64="AAEC").to_dict() == {"value_base64": "AAEC"}

    def test_shape_update(self):
        assert ShapeUpdateRequest([20]).to_dict() == {"shape": [20]}

    def test_link_create_variants(self):
        assert LinkCreateRequest(id="d-1").to_dict() == {"id": "d-1"}
        assert LinkCreateRequest(h5path="/a", h5domain="/b.h5").to_dict() == {"h5path": "/a", "h5domain": "/b.h5"}

    def test_attribute_create_scalar(self):
        request = AttributeCreateRequest(type="H5T_STD_I32LE", value=42)
        assert request.to_dict() == {"type": "H5T_STD_I32LE", "value": 42}

    def test_acl_update(self):
        request = AclUpdateRequest(read=True, update_acl=False)
        assert request.to_dict() == {"read": True, "updateACL": False}


class TestHashing:
    """Tests for hashing frozen models that hold lists and dicts."""

    @pytest.mark.parametrize("make", [
        lambda: DataType.from_dict({"class": "H5T_ARRAY", "base": "H5T_STD_I32LE", "dims": [2, 2]}),
        lambda: Shape("H5S_SIMPLE", dims=[4, 4], maxdims=[4, 0]),
        lambda: Dataset.from_dict({
            "id": "d-1", "type": "H5T_STD_I32LE",
            "shape": {"class": "H5S_SIMPLE", "dims": [10]},
            "layout": {"class": "H5D_CHUNKED", "dims": [5]},
            "hrefs": [{"href": "http://hsds.test/datasets/d-1", "rel": "self"}],
        }),
        lambda: Domain.from_dict({"root": "g-1", "class": "domain", "hrefs": []}),
        lambda: Links(links=[link_from_response({"link": {"title": "a", "class": "H5L_TYPE_SOFT", "h5path": "/x"}})]),
        lambda: Attribute(name="grid", type="H5T_STD_I32LE", value=[[1, 2], [3, 4]]),
        lambda: AttributeCreateRequest(type="H5T_STD_I32LE", shape=[2], value=[1, 2]),
        lambda: DatasetValueRequest(value=[1, 2], start=[0], stop=[2]),
        lambda: ShapeUpdateRequest(shape=[20]),
    ])
    def test_equal_models_hash_equal(self, make):
        first, second = make(), make()
        assert first == second
        assert hash(first) == hash(second)

    def test_models_in_a_set(self):
        shapes = {Shape("H5S_SIMPLE", dims=[3]), Shape("H5S_SIMPLE", dims=[3]), Shape("H5S_SCALAR")}
        assert len(shapes) == 2
