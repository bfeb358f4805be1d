"""
Interfaces de los clientes de Source y Target.
Define el contrato que debe cumplir cualquier implementación
(Airtable/Webflow reales o los stores en memoria).
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from classes_sync.domain.entities.records import SourceRecord, TargetItem


class ISourceClient(ABC):
    """
    Interfaz del store origen (tabular, fuente de verdad).
    """

    @abstractmethod
    def fetch_records(self, collection_name: str) -> List[SourceRecord]:
        """
        Trae todos los registros de una tabla.

        Args:
            collection_name: Nombre de la tabla en el origen

        Returns:
            List[SourceRecord]: Snapshot de la tabla

        Raises:
            SourceFetchError: Si el origen no responde 2xx
        """
        pass


class ITargetClient(ABC):
    """
    Interfaz del store destino (contenido publicado).
    Todas las operaciones levantan TargetOperationError si fallan.
    """

    @abstractmethod
    def fetch_items(self) -> List[TargetItem]:
        """
        Lista todos los items de la coleccion destino.

        Returns:
            List[TargetItem]: Snapshot de la coleccion
        """
        pass

    @abstractmethod
    def create_item(self, fields: Dict[str, Any]) -> TargetItem:
        """
        Crea un item con los campos ya mapeados.

        Args:
            fields: Campos en el esquema del destino

        Returns:
            TargetItem: Item creado con su id asignado
        """
        pass

    @abstractmethod
    def update_item(self, item_id: str, fields: Dict[str, Any]) -> TargetItem:
        """
        Reemplaza los campos de un item existente.

        Args:
            item_id: ID del item en el destino
            fields: Campos en el esquema del destino

        Returns:
            TargetItem: Item actualizado
        """
        pass

    @abstractmethod
    def delete_item(self, item_id: str) -> None:
        """
        Borra un item.

        Args:
            item_id: ID del item en el destino
        """
        pass
