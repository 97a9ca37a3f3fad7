"""
Core data models for the Marketplace CLI.

Every model maps its fields onto the JSON keys used by the marketplace API and
keeps any key it does not know about in ``extra``. A product update replaces
the whole document on the server, so fields the client does not model must
travel back unchanged.
"""

import json
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

HASH_ALGO_SHA1 = "SHA1"
HASH_ALGO_SHA256 = "SHA256"

DEPLOYMENT_TYPE_HELM = "HELM"


def json_field(key: str, default: Any = None, model: type = None, many: bool = False):
    """Declare a dataclass field stored under ``key`` in the API JSON."""
    metadata = {'json': key, 'model': model, 'many': many}
    if many:
        return field(default_factory=list, metadata=metadata)
    return field(default=default, metadata=metadata)


def _decode_value(model_field, raw: Any) -> Any:
    model = model_field.metadata.get('model')
    if model_field.metadata.get('many'):
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise TypeError(f"expected a list for '{model_field.metadata['json']}', got {type(raw).__name__}")
        if model is None:
            return list(raw)
        return [model.from_dict(item) for item in raw]
    if model is None or raw is None:
        return raw
    return model.from_dict(raw)


def _encode_value(value: Any) -> Any:
    if isinstance(value, JSONModel):
        return value.to_dict()
    if isinstance(value, list):
        return [_encode_value(item) for item in value]
    return value


class JSONModel:
    """Mixin for dataclasses declared with ``json_field``."""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """
        Build an instance from decoded API JSON.

        Keys are matched exactly first and case-insensitively second, the way
        the API's own clients decode them. Unmatched keys land in ``extra``.

        Raises:
            TypeError: If ``data`` or a nested value has the wrong JSON type
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object for {cls.__name__}, got {type(data).__name__}")

        lowered = {key.lower(): key for key in data}
        values = {}
        consumed = set()

        for model_field in fields(cls):
            key = model_field.metadata.get('json')
            if key is None:
                continue
            source_key = key if key in data else lowered.get(key.lower())
            if source_key is None:
                continue
            consumed.add(source_key)
            values[model_field.name] = _decode_value(model_field, data[source_key])

        values['extra'] = {key: value for key, value in data.items() if key not in consumed}
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Encode to API JSON; fields set to None and empty lists are omitted."""
        result = dict(self.extra)
        for model_field in fields(self):
            key = model_field.metadata.get('json')
            if key is None:
                continue
            value = getattr(self, model_field.name)
            if value is None or (isinstance(value, list) and not value):
                continue
            result[key] = _encode_value(value)
        return result


@dataclass
class Repo(JSONModel):
    """Chart repository reference."""
    name: Optional[str] = json_field('name')
    url: Optional[str] = json_field('url')
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class Version(JSONModel):
    """A product version. ``status`` is informational only."""
    number: Optional[str] = json_field('versionnumber')
    details: Optional[str] = json_field('versiondetails')
    status: Optional[str] = json_field('status')
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class ChartVersion(JSONModel):
    """Helm chart attached to a product version. ``id`` is assigned by the server."""
    id: Optional[str] = json_field('id')
    name: Optional[str] = json_field('chartname')
    version: Optional[str] = json_field('version')
    app_version: Optional[str] = json_field('appversion')
    repo: Optional[Repo] = json_field('repo', model=Repo)
    helm_tar_url: Optional[str] = json_field('helmtarurl')
    tar_url: Optional[str] = json_field('tarurl')
    status: Optional[str] = json_field('status')
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class ProductDeploymentFile(JSONModel):
    """An uploaded deployment file (OVA) attached to a product version."""
    id: Optional[str] = json_field('id')
    name: Optional[str] = json_field('name')
    url: Optional[str] = json_field('url')
    app_version: Optional[str] = json_field('appversion')
    hash_digest: Optional[str] = json_field('hashdigest')
    hash_algo: Optional[str] = json_field('hashalgo')
    status: Optional[str] = json_field('status')
    item_json: Optional[str] = json_field('itemjson')
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    def item_details(self) -> Dict[str, Any]:
        """
        Decode ``item_json``, the server's description of the processed file.

        Returns:
            Dictionary with ``name``, ``type`` and ``files``; empty if the
            server has not processed the file yet

        Raises:
            ValueError: If ``item_json`` is not a string holding a JSON object
        """
        if not self.item_json:
            return {}
        if not isinstance(self.item_json, str):
            raise ValueError(f"item json is a {type(self.item_json).__name__}, expected a string")
        details = json.loads(self.item_json)
        if not isinstance(details, dict):
            raise ValueError("item json is not an object")
        return details


@dataclass
class DockerImageTag(JSONModel):
    tag: Optional[str] = json_field('tag')
    type: Optional[str] = json_field('type')
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class DockerURLDetails(JSONModel):
    key: Optional[str] = json_field('key')
    url: Optional[str] = json_field('url')
    download_count: Optional[int] = json_field('downloadcount')
    image_tags: List[DockerImageTag] = json_field('imagetags', model=DockerImageTag, many=True)
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class DockerVersionList(JSONModel):
    """Container images published for one product version."""
    id: Optional[str] = json_field('id')
    app_version: Optional[str] = json_field('appversion')
    deployment_instruction: Optional[str] = json_field('deploymentinstruction')
    docker_urls: List[DockerURLDetails] = json_field('dockerurls', model=DockerURLDetails, many=True)
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class PublisherDetails(JSONModel):
    org_id: Optional[str] = json_field('orgid')
    org_display_name: Optional[str] = json_field('orgdisplayname')
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class Product(JSONModel):
    """The marketplace listing aggregate: metadata plus version-scoped artifacts."""
    product_id: Optional[str] = json_field('productid')
    slug: Optional[str] = json_field('slug')
    display_name: Optional[str] = json_field('displayname')
    solution_type: Optional[str] = json_field('solutiontype')
    status: Optional[str] = json_field('status')
    deployment_types: List[str] = json_field('deploymenttypes', many=True)
    versions: List[Version] = json_field('versions', model=Version, many=True)
    all_versions: List[Version] = json_field('allversions', model=Version, many=True)
    chart_versions: List[ChartVersion] = json_field('chartversions', model=ChartVersion, many=True)
    product_deployment_files: List[ProductDeploymentFile] = json_field(
        'productdeploymentfiles', model=ProductDeploymentFile, many=True)
    docker_link_versions: List[DockerVersionList] = json_field(
        'dockerlinkversions', model=DockerVersionList, many=True)
    publisher_details: Optional[PublisherDetails] = json_field('publisherdetails', model=PublisherDetails)
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    def has_version(self, number: str) -> bool:
        return any(version.number == number for version in self.all_versions)

    def get_version(self, number: str = "") -> Optional[Version]:
        """
        Look up a version by number.

        An empty number selects the latest version, which is the last entry of
        ``all_versions`` in the order the server returned them. No semantic
        version comparison takes place.

        Returns:
            Matching Version, or None when there is no match
        """
        if not number:
            return self.all_versions[-1] if self.all_versions else None

        for version in self.all_versions:
            if version.number == number:
                return version
        return None

    def get_charts_for_version(self, number: str) -> List[ChartVersion]:
        return [chart for chart in self.chart_versions if chart.app_version == number]

    def get_chart(self, chart_id: str) -> Optional[ChartVersion]:
        for chart in self.chart_versions:
            if chart.id == chart_id:
                return chart
        return None

    def get_ovas_for_version(self, number: str) -> List[ProductDeploymentFile]:
        return [ova for ova in self.product_deployment_files if ova.app_version == number]

    def get_container_images_for_version(self, number: str) -> List[DockerVersionList]:
        return [images for images in self.docker_link_versions if images.app_version == number]

    def add_deployment_type(self, deployment_type: str) -> None:
        if deployment_type not in self.deployment_types:
            self.deployment_types.append(deployment_type)

    def add_chart(self, chart: ChartVersion) -> None:
        self.chart_versions.append(chart)

    def add_deployment_file(self, deployment_file: ProductDeploymentFile) -> None:
        self.product_deployment_files.append(deployment_file)

    @property
    def org_id(self) -> Optional[str]:
        """Publisher organization id, used as the upload key prefix."""
        if self.publisher_details is None:
            return None
        return self.publisher_details.org_id
