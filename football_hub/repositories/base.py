"""Primitivas de upsert compartilhadas pelos repositories"""
from typing import Iterable, Type
from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def dialect_insert(db: AsyncSession, model: Type):
    """insert() com suporte a ON CONFLICT para o dialeto da sessão"""
    dialect = db.get_bind().dialect.name
    try:
        return _INSERTS[dialect](model)
    except KeyError:
        raise RuntimeError(f"Upsert não suportado para o dialeto '{dialect}'")


async def upsert_by_external_ref(
    db: AsyncSession,
    model: Type,
    values: dict,
    index_elements: Iterable[str] = ("external_ref",),
):
    """
    INSERT ... ON CONFLICT (external_ref) DO UPDATE em um único statement.
    Upserts concorrentes da mesma chave serializam no banco.
    Retorna a linha persistida.
    """
    index_elements = list(index_elements)
    stmt = dialect_insert(db, model).values(**values)
    update_cols = {
        key: stmt.excluded[key]
        for key in values
        if key not in index_elements
    }
    update_cols["updated_at"] = func.now()
    stmt = stmt.on_conflict_do_update(index_elements=index_elements, set_=update_cols)
    await db.execute(stmt)
    await db.commit()

    conditions = [getattr(model, key) == values[key] for key in index_elements]
    result = await db.execute(
        select(model).filter(*conditions).execution_options(populate_existing=True)
    )
    return result.scalar_one()
