"""
XML configuration parser.

Turns the configuration document into flat gesture bindings:

    <touchegg>
      <application name="Google-chrome,Chromium-browser">
        <gesture type="SWIPE" fingers="3" direction="LEFT">
          <action type="SEND_KEYS">
            <keys>Control+Tab</keys>
          </action>
        </gesture>
      </application>
    </touchegg>

Attribute values are not validated here; unknown or missing attributes become
empty strings.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional

from ..errors import ConfigParseError
from ..models import GestureBinding
from ..store import GestureConfigStore

logger = logging.getLogger(__name__)


def split_applications(apps_str: str) -> List[str]:
    """Split a comma-separated application name attribute."""
    return [app.strip() for app in apps_str.split(",")]


def _node_text(node: ET.Element) -> str:
    # Whitespace-only text (indentation) counts as empty
    text = node.text or ""
    return text if text.strip() else ""


class XmlConfigParser:
    """Parses the XML configuration file and registers its gestures in a store."""

    def __init__(self, store: GestureConfigStore):
        """
        Initialize configuration parser.

        Args:
            store: Store receiving the parsed gesture bindings
        """
        self.store = store

    def read(self, config_path: Path) -> List[GestureBinding]:
        """
        Parse a configuration file without touching the store.

        Args:
            config_path: Path to the configuration file

        Returns:
            Gesture bindings in document order

        Raises:
            ConfigParseError: If the file is missing or is not well-formed XML
        """
        try:
            tree = ET.parse(config_path)
        except ET.ParseError as e:
            raise ConfigParseError(config_path, str(e)) from e
        except OSError as e:
            raise ConfigParseError(config_path, e.strerror or str(e)) from e

        return self.parse_application_nodes(tree.getroot())

    def parse_application_nodes(self, root_node: ET.Element) -> List[GestureBinding]:
        bindings = []

        for application_node in root_node.findall("application"):
            applications = split_applications(application_node.get("name", ""))

            for gesture_node in application_node.findall("gesture"):
                action_node = gesture_node.find("action")

                bindings.append(GestureBinding(
                    applications=applications,
                    gesture_type=gesture_node.get("type", ""),
                    fingers=gesture_node.get("fingers", ""),
                    direction=gesture_node.get("direction", ""),
                    action_type=action_node.get("type", "") if action_node is not None else "",
                    action_settings=self._parse_action_settings(action_node)
                ))

        return bindings

    @staticmethod
    def _parse_action_settings(action_node: Optional[ET.Element]) -> Dict[str, str]:
        action_settings: Dict[str, str] = {}
        if action_node is None:
            return action_settings

        for setting_node in action_node:
            if not isinstance(setting_node.tag, str):
                continue
            # Repeated setting names: the last one wins
            action_settings[setting_node.tag] = _node_text(setting_node)

        return action_settings

    def apply(self, bindings: List[GestureBinding]) -> int:
        """
        Register parsed bindings in the store, once per application.

        Args:
            bindings: Bindings returned by read()

        Returns:
            Number of save_gesture_config() calls made
        """
        registrations = 0
        for binding in bindings:
            for application in binding.applications:
                self.store.save_gesture_config(
                    application,
                    binding.gesture_type,
                    binding.fingers,
                    binding.direction,
                    binding.action_type,
                    dict(binding.action_settings)
                )
                registrations += 1

        logger.debug(f"Registered {registrations} gestures from {len(bindings)} gesture blocks")
        return registrations

    def parse(self, config_path: Path) -> int:
        """
        Parse a configuration file and register its gestures in the store.

        The whole document is parsed before the store is written to.

        Raises:
            ConfigParseError: If the file is missing or is not well-formed XML
        """
        bindings = self.read(config_path)
        with self.store.transaction():
            return self.apply(bindings)
