"""
Ingestion — document loading and batched loading into the FAQ store.

- :mod:`~faq_rag.ingestion.loader` turns PDF / text files into raw text.
- :mod:`~faq_rag.ingestion.batch` pushes extracted FAQ records into the
  vector store in small, throttled batches.
"""
