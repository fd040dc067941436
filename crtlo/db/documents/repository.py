"""Repository for generated documents."""

from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from crtlo.db.documents.model import Document
from crtlo.utils.logger import logger


class DocumentRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_document(
        self,
        user_id: str,
        document_type: str,
        title: str,
        content: str,
        property_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Document:
        """
        Store generated document content.

        Args:
            user_id: Owner of the record
            document_type: Kind of document requested
            title: Display title
            content: Generated text
            property_id: Optional related property
            metadata: The facts the document was generated from

        Returns:
            Document: Created record
        """
        document = Document(
            user_id=user_id,
            property_id=property_id,
            document_type=document_type,
            title=title,
            content=content,
            document_metadata=metadata or {},
        )

        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)

        logger.info(
            "[DocumentRepository] Created document",
            document_id=document.id,
            document_type=document_type,
        )
        return document

    async def list_documents(self, user_id: str) -> list[Document]:
        stmt = (
            select(Document)
            .where(Document.user_id == user_id)
            .order_by(desc(Document.created_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
