from enum import Enum


class ChainOrder(str, Enum):
    """Order in which a fetched intermediate is merged with the leaf.

    INTERMEDIATE_FIRST is the convention of the storage backend this engine was
    built for; LEAF_FIRST is the order most TLS stacks expect.
    """

    INTERMEDIATE_FIRST = "intermediate_first"
    LEAF_FIRST = "leaf_first"

    @classmethod
    def parse(cls, value: str) -> "ChainOrder":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown chain order '{value}'. Choose from: {[o.value for o in cls]}"
            ) from None


def merge_chain(leaf_pem: str, intermediate_pem: str, order: ChainOrder) -> str:
    leaf = leaf_pem.strip()
    intermediate = intermediate_pem.strip()
    if order is ChainOrder.LEAF_FIRST:
        return f"{leaf}\n{intermediate}\n"
    return f"{intermediate}\n{leaf}\n"
