#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Discipline Dashboard - Habit Storage
Хранение полного списка привычек под фиксированным ключом в виде JSON

Версия: 1.0.0
Дата: 2026-10-19
"""

import json
import shutil
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence
import logging

from core.models import Habit, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "discipline-habits"

# ===== EXCEPTIONS =====

class DatabaseError(Exception):
    """Базовое исключение для ошибок хранилища"""
    pass

class DatabaseCorruptionError(DatabaseError):
    """Сохраненные данные повреждены или не соответствуют формату"""
    pass

# ===== SERIALIZATION =====

def serialize_habits(habits: Sequence[Habit]) -> str:
    """Список привычек -> JSON-текст"""
    return json.dumps([habit.to_dict() for habit in habits], ensure_ascii=False, indent=2)

def deserialize_habits(text: str) -> List[Habit]:
    """JSON-текст -> список привычек. Ошибки формата -> DatabaseCorruptionError"""
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise DatabaseCorruptionError(f"Невалидный JSON: {e}") from e

    if not isinstance(data, list):
        raise DatabaseCorruptionError(f"Ожидался JSON-массив, получено {type(data).__name__}")

    habits: List[Habit] = []
    seen_ids = set()
    for index, item in enumerate(data):
        try:
            habit = Habit.from_dict(item)
        except ValidationError as e:
            raise DatabaseCorruptionError(f"Запись #{index}: {e}") from e

        if habit.id in seen_ids:
            raise DatabaseCorruptionError(f"Повторяющийся id привычки: {habit.id}")
        seen_ids.add(habit.id)
        habits.append(habit)

    return habits

# ===== REPOSITORIES =====

class HabitRepository(ABC):
    """Хранилище списка привычек: load при старте, save после каждой мутации"""

    def __init__(self, storage_key: str = DEFAULT_STORAGE_KEY):
        self.storage_key = storage_key

    @abstractmethod
    def read_raw(self) -> Optional[str]:
        """Сырой JSON-текст под ключом или None, если ключа нет"""

    @abstractmethod
    def write_raw(self, text: str) -> None:
        """Перезаписать значение под ключом"""

    @abstractmethod
    def quarantine(self) -> Optional[str]:
        """Убрать поврежденное значение в сторону; вернуть, куда оно перенесено"""

    def load(self) -> List[Habit]:
        text = self.read_raw()
        if text is None:
            logger.info(f"Ключ {self.storage_key!r} пуст, начинаем с пустого списка")
            return []

        habits = deserialize_habits(text)
        logger.info(f"Загружено привычек: {len(habits)}")
        return habits

    def save(self, habits: Sequence[Habit]) -> None:
        self.write_raw(serialize_habits(habits))
        logger.debug(f"Сохранено привычек: {len(habits)}")

class JsonFileRepository(HabitRepository):
    """JSON-файл <data_dir>/<storage_key>.json с атомарной записью"""

    def __init__(self, data_dir: Path, storage_key: str = DEFAULT_STORAGE_KEY):
        super().__init__(storage_key)
        self.data_dir = Path(data_dir)
        self.data_file = self.data_dir / f"{storage_key}.json"

    def read_raw(self) -> Optional[str]:
        if not self.data_file.exists():
            return None
        try:
            return self.data_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DatabaseCorruptionError(f"Файл {self.data_file} не в UTF-8: {e}") from e
        except OSError as e:
            raise DatabaseError(f"Не удалось прочитать {self.data_file}: {e}") from e

    def write_raw(self, text: str) -> None:
        temp_file = self.data_file.with_suffix('.tmp')
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                f.write(text)

            # Проверяем целостность записанного файла
            with open(temp_file, 'r', encoding='utf-8') as f:
                json.load(f)

            shutil.move(str(temp_file), str(self.data_file))
        except (OSError, ValueError) as e:
            if temp_file.exists():
                temp_file.unlink()
            raise DatabaseError(f"Не удалось записать {self.data_file}: {e}") from e

    def quarantine(self) -> Optional[str]:
        if not self.data_file.exists():
            return None
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        target = self.data_dir / f"{self.storage_key}.corrupt-{timestamp}.json"
        try:
            shutil.move(str(self.data_file), str(target))
        except OSError as e:
            raise DatabaseError(f"Не удалось перенести {self.data_file}: {e}") from e
        logger.warning(f"Поврежденный файл перенесен: {target}")
        return str(target)

class InMemoryRepository(HabitRepository):
    """Процессное key-value хранилище (тесты, временный режим)"""

    def __init__(self, storage_key: str = DEFAULT_STORAGE_KEY, store: Optional[Dict[str, str]] = None):
        super().__init__(storage_key)
        self.store: Dict[str, str] = store if store is not None else {}

    def read_raw(self) -> Optional[str]:
        return self.store.get(self.storage_key)

    def write_raw(self, text: str) -> None:
        self.store[self.storage_key] = text

    def quarantine(self) -> Optional[str]:
        if self.storage_key not in self.store:
            return None
        target = f"{self.storage_key}.corrupt"
        self.store[target] = self.store.pop(self.storage_key)
        logger.warning(f"Поврежденное значение перенесено под ключ {target!r}")
        return target

def create_repository(settings) -> HabitRepository:
    """Выбор хранилища по STORAGE_BACKEND"""
    if settings.STORAGE_BACKEND == "memory":
        return InMemoryRepository(settings.STORAGE_KEY)
    return JsonFileRepository(settings.DATA_DIR, settings.STORAGE_KEY)
