"""
Rigid attribute-only elements of the HealthData prefix.

<!ELEMENT ExportDate EMPTY>
<!ATTLIST ExportDate value CDATA #REQUIRED>

<!ELEMENT Me EMPTY>
<!ATTLIST Me
  HKCharacteristicTypeIdentifierDateOfBirth         CDATA #REQUIRED
  HKCharacteristicTypeIdentifierBiologicalSex       CDATA #REQUIRED
  HKCharacteristicTypeIdentifierBloodType           CDATA #REQUIRED
  HKCharacteristicTypeIdentifierFitzpatrickSkinType CDATA #REQUIRED
>
"""

from __future__ import annotations

from typing import Dict, Optional

from health_export.loader import OpenTag
from health_export.nodes.base import ConversionSession, RigidLeafNode
from health_export.tables.fields import parse_timestamp

CHARACTERISTIC_PREFIX = "HKCharacteristicTypeIdentifier"

# profile field -> required
PROFILE_FIELDS = {
    "dateOfBirth": True,
    "biologicalSex": True,
    "bloodType": True,
    "fitzpatrickSkinType": True,
    "cardioFitnessMedicationsUse": False,
}


def characteristic_key(field_name: str) -> str:
    """``dateOfBirth`` -> ``HKCharacteristicTypeIdentifierDateOfBirth``"""
    return f"{CHARACTERISTIC_PREFIX}{field_name[0].upper()}{field_name[1:]}"


class ExportDateNode(RigidLeafNode):
    element = "ExportDate"

    def __init__(self, tag: OpenTag, session: ConversionSession) -> None:
        super().__init__(session)
        self.value: Optional[str] = tag.attributes.get("value")
        if parse_timestamp(self.value) is None:
            session.issues.missing_attribute(self.element, "value", tag.attributes)
            self.value = None


class PersonProfileNode(RigidLeafNode):
    element = "Me"

    def __init__(self, tag: OpenTag, session: ConversionSession) -> None:
        super().__init__(session)
        self.profile: Dict[str, str] = {}

        for field_name, required in PROFILE_FIELDS.items():
            key = characteristic_key(field_name)
            value = tag.attributes.get(key)
            if value is None:
                if required:
                    session.issues.missing_attribute(self.element, key, tag.attributes)
                continue
            self.profile[field_name] = value
