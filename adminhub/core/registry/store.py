from __future__ import annotations

from typing import Dict, List, Optional

from adminhub.core.registry.models import AdminModule


class ModuleStore:
    """
    Canonical module tree with O(1) lookup by id.

    Every node lives exactly once in `_nodes`; a parent's `sub_modules` list
    holds references to those same objects, and root order is kept as a list
    of ids. `_parents` maps each id to its parent id (None for roots).
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, AdminModule] = {}
        self._parents: Dict[str, Optional[str]] = {}
        self._root_ids: List[str] = []

    def upsert(self, module: AdminModule, parent_id: Optional[str] = None) -> None:
        if parent_id is not None and parent_id not in self._nodes:
            raise KeyError(parent_id)
        if parent_id is not None and self._is_within(parent_id, module.id):
            raise ValueError(f"Cannot place '{module.id}' under its own descendant '{parent_id}'.")
        children = list(module.sub_modules or [])
        module.sub_modules = None

        if module.id in self._nodes:
            self._forget_descendants(module.id)
            if self._parents.get(module.id) != parent_id:
                self._detach(module.id)
        self._nodes[module.id] = module
        self._attach(module, parent_id)

        for child in children:
            self.upsert(child, parent_id=module.id)

    def remove(self, module_id: str) -> bool:
        if module_id not in self._nodes:
            return False
        self._forget_descendants(module_id)
        self._detach(module_id)
        del self._nodes[module_id]
        self._parents.pop(module_id, None)
        return True

    def get(self, module_id: str) -> Optional[AdminModule]:
        return self._nodes.get(module_id)

    def has(self, module_id: str) -> bool:
        return module_id in self._nodes

    def parent_of(self, module_id: str) -> Optional[str]:
        return self._parents.get(module_id)

    def all_roots(self) -> List[AdminModule]:
        return [self._nodes[i] for i in self._root_ids]

    def all_flat(self) -> List[AdminModule]:
        out: List[AdminModule] = []
        for root in self.all_roots():
            out.extend(root.iter_tree())
        return out

    def clear(self) -> None:
        self._nodes.clear()
        self._parents.clear()
        self._root_ids.clear()

    def __len__(self) -> int:
        return len(self._nodes)

    # ---- internals ----
    def _attach(self, module: AdminModule, parent_id: Optional[str]) -> None:
        if parent_id is None:
            if module.id not in self._root_ids:
                self._root_ids.append(module.id)
        else:
            parent = self._nodes[parent_id]
            siblings = list(parent.sub_modules or [])
            for i, sib in enumerate(siblings):
                if sib.id == module.id:
                    siblings[i] = module
                    break
            else:
                siblings.append(module)
            parent.sub_modules = siblings
        self._parents[module.id] = parent_id

    def _detach(self, module_id: str) -> None:
        parent_id = self._parents.get(module_id)
        if parent_id is None:
            if module_id in self._root_ids:
                self._root_ids.remove(module_id)
            return
        parent = self._nodes.get(parent_id)
        if parent is None:
            return
        remaining = [m for m in (parent.sub_modules or []) if m.id != module_id]
        parent.sub_modules = remaining or None

    def _is_within(self, module_id: str, ancestor_id: str) -> bool:
        cur: Optional[str] = module_id
        while cur is not None:
            if cur == ancestor_id:
                return True
            cur = self._parents.get(cur)
        return False

    def _forget_descendants(self, module_id: str) -> None:
        node = self._nodes[module_id]
        for child in node.sub_modules or []:
            self._forget_descendants(child.id)
            self._nodes.pop(child.id, None)
            self._parents.pop(child.id, None)
        node.sub_modules = None
