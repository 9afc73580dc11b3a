# tests/resize/test_catalog.py

import pytest

from infraresize.core.exceptions import UnsupportedInstanceType
from infraresize.models.catalog import CatalogEntry
from infraresize.models.machine_pool import CloudProvider
from infraresize.resize.catalog import InstanceSizeCatalog

DEFAULT_LADDER = [
    ("aws", "m5.xlarge", "r5.xlarge"),
    ("aws", "m5.2xlarge", "r5.2xlarge"),
    ("aws", "r5.xlarge", "r5.2xlarge"),
    ("aws", "r5.2xlarge", "r5.4xlarge"),
    ("aws", "r5.4xlarge", "r5.8xlarge"),
    ("gcp", "custom-4-32768-ext", "custom-8-65536-ext"),
    ("gcp", "custom-8-65536-ext", "custom-16-131072-ext"),
]


@pytest.fixture
def catalog():
    return InstanceSizeCatalog.from_csv()


@pytest.mark.parametrize("provider, current, expected", DEFAULT_LADDER)
def test_bundled_ladder_maps_to_next_size(catalog, provider, current, expected):
    assert catalog.next_size(CloudProvider(provider), current) == expected


def test_bundled_ladder_has_no_extra_entries(catalog):
    assert len(catalog) == len(DEFAULT_LADDER)


def test_ladder_terminus_is_unsupported(catalog):
    with pytest.raises(UnsupportedInstanceType) as exc_info:
        catalog.next_size(CloudProvider.AWS, "r5.8xlarge")

    assert exc_info.value.instance_type == "r5.8xlarge"
    assert "r5.8xlarge not supported" in str(exc_info.value)


def test_lookup_is_keyed_by_provider(catalog):
    """An AWS instance type is unknown when looked up for GCP."""
    assert catalog.supports("aws", "m5.xlarge")
    assert not catalog.supports("gcp", "m5.xlarge")
    with pytest.raises(UnsupportedInstanceType):
        catalog.next_size(CloudProvider.GCP, "m5.xlarge")


def test_injected_ladder_replaces_defaults():
    catalog = InstanceSizeCatalog([CatalogEntry(provider="aws", current="m6i.xlarge", next="r6i.xlarge")])

    assert catalog.next_size(CloudProvider.AWS, "m6i.xlarge") == "r6i.xlarge"
    with pytest.raises(UnsupportedInstanceType):
        catalog.next_size(CloudProvider.AWS, "m5.xlarge")


def test_later_entry_wins_on_redefinition():
    catalog = InstanceSizeCatalog(
        [
            CatalogEntry(provider="aws", current="m5.xlarge", next="r5.xlarge"),
            CatalogEntry(provider="aws", current="m5.xlarge", next="r5.2xlarge"),
        ]
    )

    assert catalog.next_size(CloudProvider.AWS, "m5.xlarge") == "r5.2xlarge"
    assert len(catalog) == 1
