class ShopQueryError(Exception):
    """Базовая ошибка слоя запросов"""


class EmptyAggregateError(ShopQueryError):
    """Агрегат (среднее) запрошен по пустому набору цен"""


class SeedDataError(ShopQueryError):
    """Seed-файл ссылается на несуществующего покупателя или товар"""
