"""
Data models for HSDS requests and responses.

Response models are built with ``from_dict`` from the decoded JSON body;
request models are turned into JSON with ``to_dict``, which leaves out unset
optional fields. Models are frozen: they describe what the server said or
what the caller asked for, nothing more. List and dict fields are left out of
the hash, so models stay hashable and equal models hash equal.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List, Union

# Sentinel used by HSDS for variable-length strings
H5T_VARIABLE = "H5T_VARIABLE"
H5S_NULL = "H5S_NULL"


def _value(v: Any) -> Any:
    """Unwrap enums for JSON output."""
    return v.value if isinstance(v, Enum) else v


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None."""
    return {k: _value(v) for k, v in data.items() if v is not None}


class DomainClass(str, Enum):
    DOMAIN = "domain"
    FOLDER = "folder"


class LinkClass(str, Enum):
    HARD = "H5L_TYPE_HARD"
    SOFT = "H5L_TYPE_SOFT"
    EXTERNAL = "H5L_TYPE_EXTERNAL"


class StringCharSet(str, Enum):
    ASCII = "H5T_CSET_ASCII"
    UTF8 = "H5T_CSET_UTF8"


class StringPadding(str, Enum):
    NULL_PAD = "H5T_STR_NULLPAD"
    NULL_TERM = "H5T_STR_NULLTERM"
    SPACE_PAD = "H5T_STR_SPACEPAD"


class Collection(str, Enum):
    """Object collections that can carry attributes."""
    GROUPS = "groups"
    DATASETS = "datasets"
    DATATYPES = "datatypes"


# ============================================================================
# Common
# ============================================================================

@dataclass(frozen=True)
class Href:
    """Hypermedia reference returned with most responses."""
    href: str
    rel: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Href":
        return cls(href=data["href"], rel=data["rel"])

    def to_dict(self) -> Dict[str, Any]:
        return {"href": self.href, "rel": self.rel}


def _hrefs(data: Dict[str, Any]) -> Optional[List[Href]]:
    items = data.get("hrefs")
    if items is None:
        return None
    return [Href.from_dict(h) for h in items]


# ============================================================================
# Types and shapes
# ============================================================================

_DATATYPE_KEYS = {
    "class": "type_class",
    "base": "base",
    "fields": "fields",
    "length": "length",
    "charSet": "char_set",
    "strPad": "str_pad",
    "order": "order",
    "size": "size",
}


@dataclass(frozen=True)
class DataType:
    """
    An HDF5 type definition.

    Keys HSDS uses that have no dedicated attribute (array dims, enum
    mappings, ...) are kept in ``extra`` so nothing is lost on the way
    through the client.
    """
    type_class: str
    base: Optional[str] = None
    fields: Optional[List[Dict[str, Any]]] = field(default=None, hash=False)
    length: Optional[Union[int, str]] = None
    char_set: Optional[str] = None
    str_pad: Optional[str] = None
    order: Optional[str] = None
    size: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataType":
        kwargs = {attr: data.get(key) for key, attr in _DATATYPE_KEYS.items()}
        if kwargs["type_class"] is None:
            raise KeyError("class")
        extra = {k: v for k, v in data.items() if k not in _DATATYPE_KEYS}
        return cls(extra=extra, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        data = _compact({key: getattr(self, attr) for key, attr in _DATATYPE_KEYS.items()})
        data.update(self.extra)
        return data

    @classmethod
    def string(
        cls,
        char_set: StringCharSet = StringCharSet.ASCII,
        str_pad: StringPadding = StringPadding.NULL_PAD,
        length: Union[int, str] = H5T_VARIABLE,
    ) -> "DataType":
        """Build an H5T_STRING type."""
        return cls(
            type_class="H5T_STRING",
            char_set=_value(char_set),
            str_pad=_value(str_pad),
            length=length,
        )

    @classmethod
    def variable_utf8(cls) -> "DataType":
        return cls.string(StringCharSet.UTF8)

    @classmethod
    def fixed_utf8(cls, length: int) -> "DataType":
        return cls.string(StringCharSet.UTF8, length=length)

    @classmethod
    def variable_ascii(cls) -> "DataType":
        return cls.string(StringCharSet.ASCII)

    @classmethod
    def fixed_ascii(cls, length: int) -> "DataType":
        return cls.string(StringCharSet.ASCII, length=length)


# Either a predefined type name (e.g. "H5T_STD_I32LE") or a full definition
TypeSpec = Union[str, DataType]

# List of dims, a scalar extent, or "H5S_NULL"
ShapeSpec = Union[List[int], int, str]


def type_spec_from_json(value: Any) -> TypeSpec:
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return DataType.from_dict(value)
    raise TypeError(f"Unexpected datatype value: {value!r}")


def type_spec_to_json(spec: TypeSpec) -> Any:
    if isinstance(spec, DataType):
        return spec.to_dict()
    return spec


@dataclass(frozen=True)
class Shape:
    """Dataspace of a dataset or attribute."""
    shape_class: str
    dims: Optional[List[int]] = field(default=None, hash=False)
    maxdims: Optional[List[int]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Shape":
        return cls(
            shape_class=data["class"],
            dims=data.get("dims"),
            maxdims=data.get("maxdims"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"class": self.shape_class, "dims": self.dims, "maxdims": self.maxdims})


# ============================================================================
# Domains
# ============================================================================

@dataclass(frozen=True)
class Acl:
    """Access rights of one user on a domain."""
    user_name: Optional[str] = None
    create: Optional[bool] = None
    read: Optional[bool] = None
    update: Optional[bool] = None
    delete: Optional[bool] = None
    read_acl: Optional[bool] = None
    update_acl: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], user_name: Optional[str] = None) -> "Acl":
        return cls(
            user_name=data.get("userName", user_name),
            create=data.get("create"),
            read=data.get("read"),
            update=data.get("update"),
            delete=data.get("delete"),
            read_acl=data.get("readACL"),
            update_acl=data.get("updateACL"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "userName": self.user_name,
            "create": self.create,
            "read": self.read,
            "update": self.update,
            "delete": self.delete,
            "readACL": self.read_acl,
            "updateACL": self.update_acl,
        })


@dataclass(frozen=True)
class Acls:
    """ACL listing of a domain."""
    acls: List[Acl] = field(hash=False)
    hrefs: Optional[List[Href]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Acls":
        return cls(acls=[Acl.from_dict(a) for a in data["acls"]], hrefs=_hrefs(data))


def acl_from_response(data: Dict[str, Any]) -> Acl:
    """Unwrap the ``acl`` object of a single-ACL response."""
    return Acl.from_dict(data["acl"])


@dataclass(frozen=True)
class Domain:
    """A domain (file-like container) or folder."""
    root: Optional[str] = None
    owner: Optional[str] = None
    domain_class: Optional[DomainClass] = None
    created: Optional[float] = None
    last_modified: Optional[float] = None
    hrefs: Optional[List[Href]] = field(default=None, hash=False)
    acls: Optional[Dict[str, Acl]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Domain":
        domain_class = data.get("class")
        acls = data.get("acls")
        return cls(
            root=data.get("root"),
            owner=data.get("owner"),
            domain_class=DomainClass(domain_class) if domain_class else None,
            created=data.get("created"),
            last_modified=data.get("lastModified"),
            hrefs=_hrefs(data),
            acls={user: Acl.from_dict(acl, user) for user, acl in acls.items()} if acls else None,
        )

    @property
    def is_folder(self) -> bool:
        return self.domain_class == DomainClass.FOLDER


@dataclass(frozen=True)
class DomainEntry:
    """One item of a folder listing."""
    name: str
    owner: Optional[str] = None
    domain_class: Optional[DomainClass] = None
    root: Optional[str] = None
    created: Optional[float] = None
    last_modified: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DomainEntry":
        domain_class = data.get("class")
        return cls(
            name=data["name"],
            owner=data.get("owner"),
            domain_class=DomainClass(domain_class) if domain_class else None,
            root=data.get("root"),
            created=data.get("created"),
            last_modified=data.get("lastModified"),
        )


@dataclass(frozen=True)
class DomainListing:
    domains: List[DomainEntry] = field(hash=False)
    hrefs: Optional[List[Href]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DomainListing":
        return cls(
            domains=[DomainEntry.from_dict(d) for d in data["domains"]],
            hrefs=_hrefs(data),
        )


# ============================================================================
# Groups
# ============================================================================

@dataclass(frozen=True)
class Group:
    id: str
    root: Optional[str] = None
    domain: Optional[str] = None
    alias: Optional[List[str]] = field(default=None, hash=False)
    created: Optional[float] = None
    last_modified: Optional[float] = None
    attribute_count: Optional[int] = None
    link_count: Optional[int] = None
    hrefs: Optional[List[Href]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        return cls(
            id=data["id"],
            root=data.get("root"),
            domain=data.get("domain"),
            alias=data.get("alias"),
            created=data.get("created"),
            last_modified=data.get("lastModified"),
            attribute_count=data.get("attributeCount"),
            link_count=data.get("linkCount"),
            hrefs=_hrefs(data),
        )


@dataclass(frozen=True)
class Groups:
    groups: List[str] = field(hash=False)
    hrefs: Optional[List[Href]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Groups":
        return cls(groups=list(data["groups"]), hrefs=_hrefs(data))


# ============================================================================
# Links
# ============================================================================

@dataclass(frozen=True)
class Link:
    """
    A named member of a group.

    Hard links carry ``id`` and ``collection``; soft links carry ``h5path``;
    external links carry ``h5path`` and ``h5domain``.
    """
    title: str
    id: Optional[str] = None
    link_class: Optional[LinkClass] = None
    collection: Optional[str] = None
    target: Optional[str] = None
    href: Optional[str] = None
    h5path: Optional[str] = None
    h5domain: Optional[str] = None
    created: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Link":
        link_class = data.get("class")
        return cls(
            title=data["title"],
            id=data.get("id"),
            link_class=LinkClass(link_class) if link_class else None,
            collection=data.get("collection"),
            target=data.get("target"),
            href=data.get("href"),
            h5path=data.get("h5path"),
            h5domain=data.get("h5domain"),
            created=data.get("created"),
        )


def link_from_response(data: Dict[str, Any]) -> Link:
    """Unwrap the ``link`` object of a single-link response."""
    body = dict(data["link"])
    if "created" not in body and "created" in data:
        body["created"] = data["created"]
    return Link.from_dict(body)


@dataclass(frozen=True)
class Links:
    links: List[Link] = field(hash=False)
    hrefs: Optional[List[Href]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Links":
        return cls(links=[Link.from_dict(item) for item in data["links"]], hrefs=_hrefs(data))


# ============================================================================
# Datasets
# ============================================================================

@dataclass(frozen=True)
class Dataset:
    id: str
    root: Optional[str] = None
    domain: Optional[str] = None
    created: Optional[float] = None
    last_modified: Optional[float] = None
    attribute_count: Optional[int] = None
    type: Optional[TypeSpec] = None
    shape: Optional[Shape] = None
    layout: Optional[Dict[str, Any]] = field(default=None, hash=False)
    creation_properties: Optional[Dict[str, Any]] = field(default=None, hash=False)
    hrefs: Optional[List[Href]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dataset":
        type_json = data.get("type")
        shape_json = data.get("shape")
        return cls(
            id=data["id"],
            root=data.get("root"),
            domain=data.get("domain"),
            created=data.get("created"),
            last_modified=data.get("lastModified"),
            attribute_count=data.get("attributeCount"),
            type=type_spec_from_json(type_json) if type_json is not None else None,
            shape=Shape.from_dict(shape_json) if shape_json is not None else None,
            layout=data.get("layout"),
            creation_properties=data.get("creationProperties"),
            hrefs=_hrefs(data),
        )


@dataclass(frozen=True)
class Datasets:
    datasets: List[str] = field(hash=False)
    hrefs: Optional[List[Href]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Datasets":
        return cls(datasets=list(data["datasets"]), hrefs=_hrefs(data))


def shape_from_response(data: Dict[str, Any]) -> Shape:
    """Unwrap the ``shape`` object of a dataset shape response."""
    return Shape.from_dict(data["shape"])


def type_from_response(data: Dict[str, Any]) -> TypeSpec:
    """Unwrap the ``type`` object of a dataset type response."""
    return type_spec_from_json(data["type"])


# ============================================================================
# Committed datatypes
# ============================================================================

@dataclass(frozen=True)
class Datatype:
    """A committed (named) datatype object."""
    id: str
    type: Optional[TypeSpec] = None
    root: Optional[str] = None
    domain: Optional[str] = None
    created: Optional[float] = None
    last_modified: Optional[float] = None
    attribute_count: Optional[int] = None
    hrefs: Optional[List[Href]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Datatype":
        type_json = data.get("type")
        return cls(
            id=data["id"],
            type=type_spec_from_json(type_json) if type_json is not None else None,
            root=data.get("root"),
            domain=data.get("domain"),
            created=data.get("created"),
            last_modified=data.get("lastModified"),
            attribute_count=data.get("attributeCount"),
            hrefs=_hrefs(data),
        )


@dataclass(frozen=True)
class Datatypes:
    datatypes: List[str] = field(hash=False)
    hrefs: Optional[List[Href]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Datatypes":
        return cls(datatypes=list(data["datatypes"]), hrefs=_hrefs(data))


# ============================================================================
# Attributes
# ============================================================================

@dataclass(frozen=True)
class Attribute:
    name: str
    type: Optional[TypeSpec] = None
    shape: Optional[Shape] = None
    value: Any = field(default=None, hash=False)
    created: Optional[float] = None
    last_modified: Optional[float] = None
    hrefs: Optional[List[Href]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Attribute":
        type_json = data.get("type")
        shape_json = data.get("shape")
        return cls(
            name=data["name"],
            type=type_spec_from_json(type_json) if type_json is not None else None,
            shape=Shape.from_dict(shape_json) if shape_json is not None else None,
            value=data.get("value"),
            created=data.get("created"),
            last_modified=data.get("lastModified"),
            hrefs=_hrefs(data),
        )


@dataclass(frozen=True)
class Attributes:
    attributes: List[Attribute] = field(hash=False)
    hrefs: Optional[List[Href]] = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Attributes":
        return cls(
            attributes=[Attribute.from_dict(a) for a in data["attributes"]],
            hrefs=_hrefs(data),
        )


# ============================================================================
# Requests
# ============================================================================

@dataclass(frozen=True)
class DomainCreateRequest:
    folder: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"folder": 1} if self.folder else {}


@dataclass(frozen=True)
class LinkRequest:
    """Link a newly created object into a parent group."""
    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class GroupCreateRequest:
    link: Optional[LinkRequest] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"link": self.link.to_dict()} if self.link else {}


@dataclass(frozen=True)
class DatasetCreateRequest:
    type: TypeSpec
    shape: Optional[ShapeSpec] = field(default=None, hash=False)
    maxdims: Optional[List[int]] = field(default=None, hash=False)
    creation_properties: Optional[Dict[str, Any]] = field(default=None, hash=False)
    link: Optional[LinkRequest] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "type": type_spec_to_json(self.type),
            "shape": self.shape,
            "maxdims": self.maxdims,
            "creationProperties": self.creation_properties,
            "link": self.link.to_dict() if self.link else None,
        })

    @classmethod
    def from_hsds_type(cls, hsds_type: str, dims: List[int]) -> "DatasetCreateRequest":
        """
        Build a request from an HSDS type name.

        "H5T_STRING" becomes a variable-length ASCII string type; any other
        name is sent as a predefined type.
        """
        if hsds_type == "H5T_STRING":
            type_spec: TypeSpec = DataType.variable_ascii()
        else:
            type_spec = hsds_type
        return cls(type=type_spec, shape=list(dims))

    @classmethod
    def from_hsds_type_with_link(
        cls,
        hsds_type: str,
        dims: List[int],
        parent_group_id: str,
        name: str,
    ) -> "DatasetCreateRequest":
        base = cls.from_hsds_type(hsds_type, dims)
        return cls(type=base.type, shape=base.shape, link=LinkRequest(parent_group_id, name))


@dataclass(frozen=True)
class ShapeUpdateRequest:
    shape: List[int] = field(hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"shape": list(self.shape)}


@dataclass(frozen=True)
class DatasetValueRequest:
    """Values to write, with an optional hyperslab or point selection."""
    value: Any = field(default=None, hash=False)
    start: Optional[List[int]] = field(default=None, hash=False)
    stop: Optional[List[int]] = field(default=None, hash=False)
    step: Optional[List[int]] = field(default=None, hash=False)
    points: Optional[List[List[int]]] = field(default=None, hash=False)
    value_base64: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "start": self.start,
            "stop": self.stop,
            "step": self.step,
            "points": self.points,
            "value": self.value,
            "value_base64": self.value_base64,
        })


@dataclass(frozen=True)
class LinkCreateRequest:
    id: Optional[str] = None
    h5path: Optional[str] = None
    h5domain: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"id": self.id, "h5path": self.h5path, "h5domain": self.h5domain})


@dataclass(frozen=True)
class AttributeCreateRequest:
    type: TypeSpec
    shape: Optional[ShapeSpec] = field(default=None, hash=False)
    value: Any = field(default=None, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "type": type_spec_to_json(self.type),
            "shape": self.shape,
            "value": self.value,
        })


@dataclass(frozen=True)
class DatatypeCommitRequest:
    type: TypeSpec
    link: Optional[LinkRequest] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "type": type_spec_to_json(self.type),
            "link": self.link.to_dict() if self.link else None,
        })


@dataclass(frozen=True)
class AclUpdateRequest:
    create: Optional[bool] = None
    read: Optional[bool] = None
    update: Optional[bool] = None
    delete: Optional[bool] = None
    read_acl: Optional[bool] = None
    update_acl: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "create": self.create,
            "read": self.read,
            "update": self.update,
            "delete": self.delete,
            "readACL": self.read_acl,
            "updateACL": self.update_acl,
        })
