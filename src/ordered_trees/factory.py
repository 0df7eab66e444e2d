"""Factory for the creation of ordered tree classes"""

from typing import Type, Tuple, Dict, Union
import logging

from ordered_trees.base import Balancing
from ordered_trees.ordered_tree_base import OrderedTreeBase, TreeNodeBase, ColoredNode

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

# Cache for previously created classes to avoid recreating them
_class_cache: Dict[Balancing, Tuple[Type[OrderedTreeBase], Type[TreeNodeBase]]] = {}

_NODE_BASES: Dict[Balancing, Type[TreeNodeBase]] = {
    Balancing.NONE: TreeNodeBase,
    Balancing.RED_BLACK: ColoredNode,
}

_CLASS_PREFIXES: Dict[Balancing, str] = {
    Balancing.NONE: "Unbalanced",
    Balancing.RED_BLACK: "RedBlack",
}


def make_tree_classes(balancing: Union[Balancing, str] = Balancing.RED_BLACK) -> Tuple[
    Type[OrderedTreeBase],
    Type[TreeNodeBase],
]:
    """
    Factory function to generate an ordered tree class and its node class
    for a balancing policy.

    Args:
        balancing: A Balancing member or its value ("none", "red_black").

    Returns:
        TreeClass – subclass of OrderedTreeBase with NodeClass and BALANCING set.
        NodeClass – subclass of TreeNodeBase (ColoredNode for red-black).

    Raises:
        ValueError: If `balancing` names no known policy.
    """
    balancing = Balancing(balancing)

    # Check if we've already created classes for this policy
    if balancing in _class_cache:
        logger.debug(f"Using cached classes for balancing={balancing.value}")
        return _class_cache[balancing]

    logger.debug(f"Creating new classes for balancing={balancing.value}")
    prefix = _CLASS_PREFIXES[balancing]

    # 1) Node class: colored for red-black trees
    node_base = _NODE_BASES[balancing]
    NodeClass = type(
        f"{prefix}Node",
        (node_base,),
        {"__slots__": ()}
    )
    logger.debug(f"Created {NodeClass.__name__} from {node_base.__name__}")

    # 2) Tree class points at the node class and carries the policy
    TreeClass = type(
        f"{prefix}Tree",
        (OrderedTreeBase,),
        {
            "NodeClass": NodeClass,
            "BALANCING": balancing,
            "__slots__": (),
        }
    )
    logger.debug(f"Created {TreeClass.__name__} with NodeClass={NodeClass.__name__}")

    _class_cache[balancing] = (TreeClass, NodeClass)
    logger.debug(f"Cached classes for balancing={balancing.value}")

    return TreeClass, NodeClass


def create_tree(balancing: Union[Balancing, str] = Balancing.RED_BLACK) -> OrderedTreeBase:
    """
    Create a new, empty ordered tree using the given balancing policy.

    Args:
        balancing: A Balancing member or its value; red-black by default.

    Returns:
        A new empty tree.
    """
    logger.debug(f"Creating new tree with balancing={Balancing(balancing).value}")
    TreeClass, _ = make_tree_classes(balancing)
    tree = TreeClass()
    logger.debug(f"Created tree instance of type {type(tree).__name__}")
    return tree
