from typing import List, Optional
from diet.domain.DietList import DietList
from diet.infra import paths
from diet.infra.json_store import JsonStore


class DietListRepository:
    def __init__(self, path=None):
        self.store = JsonStore(path or paths.DIET_LISTS_FILE)

    def list_for_client(self, client_id: str) -> List[DietList]:
        lists = [DietList.from_dict(row) for row in self.store.load() if row.get("client_id") == client_id]
        # newest first, as the client page shows them
        return sorted(lists, key=lambda d: d.created_at, reverse=True)

    def get(self, list_id: str) -> Optional[DietList]:
        for row in self.store.load():
            if row.get("id") == list_id:
                return DietList.from_dict(row)
        return None

    def add(self, diet_list: DietList) -> DietList:
        self.store.update(lambda rows: rows + [diet_list.to_dict()])
        return diet_list

    def save(self, diet_list: DietList) -> DietList:
        def change(rows):
            if not any(row.get("id") == diet_list.id for row in rows):
                raise KeyError(diet_list.id)
            return [diet_list.to_dict() if row.get("id") == diet_list.id else row for row in rows]
        self.store.update(change)
        return diet_list

    def delete(self, list_id: str) -> bool:
        removed = []

        def change(rows):
            kept = [row for row in rows if row.get("id") != list_id]
            removed.append(len(kept) != len(rows))
            return kept
        self.store.update(change)
        return removed[0]
