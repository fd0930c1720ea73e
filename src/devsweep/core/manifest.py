"""Usage manifest parsing for asset-bundle layouts.

The manifest is an XML document whose root lists ``<asset>`` elements::

    <assets>
      <asset assetId="1a2b3c" state="installed"/>
      <asset assetId="4d5e6f" state="downloading"/>
    </assets>

Only assets in the ``installed`` state count as in use.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from devsweep.core.errors import ManifestUnavailable

log = logging.getLogger(__name__)

INSTALLED_STATE = "installed"


def load_installed_assets(manifest_path: Path) -> set[str]:
    """Return the ids of all installed assets listed in the manifest.

    Raises:
        ManifestUnavailable: The manifest is missing, unreadable or not XML.
    """
    if not manifest_path.is_file():
        raise ManifestUnavailable(manifest_path, "file not found")

    try:
        tree = ET.parse(manifest_path)
    except ET.ParseError as exc:
        raise ManifestUnavailable(manifest_path, f"malformed XML ({exc})") from exc
    except OSError as exc:
        raise ManifestUnavailable(manifest_path, str(exc)) from exc

    installed = {
        asset.get("assetId", "")
        for asset in tree.getroot().iter("asset")
        if asset.get("state") == INSTALLED_STATE
    }
    installed.discard("")
    log.debug("Manifest %s lists %d installed assets", manifest_path, len(installed))
    return installed
