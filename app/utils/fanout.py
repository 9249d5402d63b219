import asyncio
from typing import Any, Awaitable, List


async def gather_all(*aws: Awaitable[Any]) -> List[Any]:
    """
    Roda as operações em paralelo e só devolve quando TODAS terminaram.
    Se alguma falhou, levanta a primeira falha (o que já foi feito não é desfeito).
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
