"""
Namespace-aware access to model.xml.

Every node in model.xml lives in the DAC serialization namespace. The
accessor binds that namespace to the ``x:`` prefix so callers can write
paths such as ``x:Relationship/x:Entry/x:References`` and exposes the
handful of lookups the extractors need.
"""

import xml.etree.ElementTree as ET
from typing import Iterable, Optional, Union

from dacpac_schema.exceptions import XmlStructureError

DAC_NAMESPACE = "http://schemas.microsoft.com/sqlserver/dac/Serialization/2012/02"
NAMESPACES = {"x": DAC_NAMESPACE}

ROOT_TAG = f"{{{DAC_NAMESPACE}}}DataSchemaModel"


class XmlPathAccessor:
    """Parsed model.xml document with namespace-bound path lookups.

    Attributes:
        root: The DataSchemaModel element.
        model: The Model element holding every schema Element.

    Usage:
        accessor = XmlPathAccessor(xml_text)
        for element in accessor.all_nodes("x:Element", accessor.model):
            kind = accessor.attribute("Type", element)
    """

    def __init__(self, xml_text: Union[str, bytes]) -> None:
        """Parse the document and locate the Model node.

        Args:
            xml_text: Contents of model.xml.

        Raises:
            XmlStructureError: If the text is not well formed XML, is not in
                the DAC namespace, or has no Model node.
        """
        try:
            self.root = ET.fromstring(xml_text)
        except ET.ParseError as e:
            raise XmlStructureError(f"model.xml is not well formed: {e}") from e

        if self.root.tag != ROOT_TAG:
            raise XmlStructureError(
                f"Expected root element 'DataSchemaModel' in namespace "
                f"'{DAC_NAMESPACE}', found '{self.root.tag}'"
            )

        self.model = self.single_node("x:Model", self.root)

    def find_node(self, path: str, context: ET.Element) -> Optional[ET.Element]:
        """Return the first node matching ``path`` under ``context``, or None."""
        return context.find(path, NAMESPACES)

    def single_node(self, path: str, context: ET.Element) -> ET.Element:
        """Return the first node matching ``path`` under ``context``.

        Raises:
            XmlStructureError: If nothing matches.
        """
        node = self.find_node(path, context)
        if node is None:
            raise XmlStructureError(
                f"Missing node '{path}'", self.attribute("Name", context)
            )
        return node

    def all_nodes(self, path: str, context: ET.Element) -> list[ET.Element]:
        """Return every node matching ``path`` under ``context`` (possibly empty)."""
        return context.findall(path, NAMESPACES)

    @staticmethod
    def attribute(name: str, node: ET.Element) -> Optional[str]:
        """Return the attribute value, or None if the node does not have it."""
        return node.get(name)

    @staticmethod
    def attribute_or_empty(name: str, node: ET.Element) -> str:
        """Return the attribute value, or "" if the node does not have it."""
        return node.get(name, "")

    def elements_of_type(self, element_type: str) -> Iterable[ET.Element]:
        """Yield top-level Elements whose Type attribute equals ``element_type``."""
        for element in self.all_nodes("x:Element", self.model):
            if element.get("Type") == element_type:
                yield element

    # --- Relationship / Property helpers -------------------------------

    def find_relationship(
        self, element: ET.Element, name: str
    ) -> Optional[ET.Element]:
        """Return the child Relationship called ``name``, or None."""
        for relationship in self.all_nodes("x:Relationship", element):
            if relationship.get("Name") == name:
                return relationship
        return None

    def require_relationship(self, element: ET.Element, name: str) -> ET.Element:
        """Return the child Relationship called ``name``.

        Raises:
            XmlStructureError: If the element has no such relationship.
        """
        relationship = self.find_relationship(element, name)
        if relationship is None:
            raise XmlStructureError(
                f"Missing relationship '{name}'", element.get("Name")
            )
        return relationship

    def find_property(self, element: ET.Element, name: str) -> Optional[ET.Element]:
        """Return the child Property called ``name``, or None."""
        for prop in self.all_nodes("x:Property", element):
            if prop.get("Name") == name:
                return prop
        return None

    def property_value(self, element: ET.Element, name: str) -> Optional[str]:
        """Return the Value attribute of the Property called ``name``."""
        prop = self.find_property(element, name)
        if prop is None:
            return None
        return prop.get("Value")

    def property_text(self, element: ET.Element, name: str) -> Optional[str]:
        """Return the inner text of the Property's nested Value node.

        Long values (scripts, descriptions) are stored as
        ``<Property Name="..."><Value><![CDATA[...]]></Value></Property>``.
        """
        prop = self.find_property(element, name)
        if prop is None:
            return None
        value = self.find_node("x:Value", prop)
        if value is None:
            return None
        return "".join(value.itertext())

    def require_property_text(self, element: ET.Element, name: str) -> str:
        """Like ``property_text`` but raises XmlStructureError when absent."""
        text = self.property_text(element, name)
        if text is None:
            raise XmlStructureError(f"Missing property '{name}'", element.get("Name"))
        return text

    def reference_names(self, relationship: ET.Element) -> list[str]:
        """Return the Name of every ``Entry/References`` under a relationship."""
        return [
            self.attribute_or_empty("Name", reference)
            for reference in self.all_nodes("x:Entry/x:References", relationship)
        ]

    def referenced_type_name(self, element: ET.Element) -> Optional[str]:
        """Follow the type specifier chain of a column or parameter.

        The type of a simple column or parameter is stored as::

            <Relationship Name="TypeSpecifier"><Entry>
              <Element Type="SqlTypeSpecifier">
                <Relationship Name="Type"><Entry>
                  <References ExternalSource="BuiltIns" Name="[int]" />

        Returns:
            The referenced type name as written (brackets included), or None.
        """
        reference = self.find_node(
            "x:Relationship/x:Entry/x:Element/x:Relationship/x:Entry/x:References",
            element,
        )
        if reference is None:
            return None
        return reference.get("Name")
