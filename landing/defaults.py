"""
Landing CMS - Default Page Document
=====================================
Seed content written to site.json on first boot, and returned by the
content store whenever the file is missing or unreadable.

Never hand this dict out directly: callers get a deep copy through
default_content() so that edits never leak back into the seed.
"""

import copy


DEFAULT_CONTENT = {
    "hero": {
        "badge": "Открыт для новых клиентов",
        "title": "Продвижение в соцсетях",
        "subtitle": "Аудит, стратегия и разбор вашего Instagram. Прозрачные цены, измеримый результат.",
        "ctaText": "Смотреть услуги",
    },
    "sections": {
        "label": "Что я предлагаю",
        "title": "Услуги и цены",
        "subtitle": "Выберите подходящий формат — от быстрого разбора до полной стратегии роста",
        "tab1": "Услуги",
        "tab2": "Закрытые каналы",
    },
    "cta": {
        "title": "Остались вопросы?",
        "subtitle": "Напишите мне, и мы подберём подходящий формат работы под ваши задачи.",
        "btnText": "Написать в Telegram",
        "tgUrl": "https://t.me/MktRahim",
    },
    "about": {
        "name": "Rahim",
        "initial": "R",
        "bio": (
            "SMM-специалист и маркетолог. Помогаю экспертам, предпринимателям и брендам "
            "выстраивать сильное присутствие в Instagram — от упаковки профиля до полной "
            "стратегии продвижения."
        ),
        "stat1Value": "50+",
        "stat1Label": "проектов",
        "stat2Value": "3+",
        "stat2Label": "года опыта",
        "stat3Value": "100%",
        "stat3Label": "индивидуальный подход",
    },
    "services": [
        {
            "title": "Консультация",
            "shortDesc": "Персональная сессия: разберём вашу стратегию, ответим на вопросы и составим план действий.",
            "price": "20 000 ₽",
            "desc": (
                "Персональная сессия длительностью 60 минут. Разберём вашу текущую стратегию "
                "продвижения, ответим на все вопросы и составим пошаговый план действий."
            ),
        },
        {
            "title": "Разбор шапки Instagram",
            "shortDesc": "Анализ bio, аватара, ссылки и highlights — рекомендации по улучшению первого впечатления.",
            "price": "2 000 ₽",
            "desc": (
                "Подробный анализ первого экрана вашего профиля: аватар, имя и юзернейм, "
                "описание bio, ссылка, актуальные Highlights."
            ),
        },
        {
            "title": "Разбор страницы",
            "shortDesc": "Детальный анализ контента, визуала и структуры вашего профиля с рекомендациями по росту.",
            "price": "5 000 ₽",
            "desc": (
                "Детальный анализ вашего профиля целиком: визуальная сетка, качество контента, "
                "заголовки и тексты постов, использование Reels и Stories."
            ),
        },
        {
            "title": "Полный аудит страницы",
            "shortDesc": "Комплексная проверка: контент, охваты, вовлечённость, конкуренты. Подробный отчёт и стратегия.",
            "price": "10 000 ₽",
            "desc": (
                "Комплексная проверка всех аспектов аккаунта: контент-стратегия, охваты и "
                "вовлечённость, анализ целевой аудитории, сравнение с конкурентами."
            ),
        },
        {
            "title": "Google Gemini",
            "shortDesc": "Годовая подписка на AI-ассистент — генерация контента, аналитика и автоматизация рутины.",
            "price": "20 000 ₽ / год",
            "desc": (
                "Годовая подписка на AI-ассистент Google Gemini. Используйте его для генерации "
                "идей и текстов постов, анализа контента конкурентов, создания контент-планов."
            ),
            "featured": True,
            "badge": "AI-инструмент",
        },
    ],
    "channels": [
        {
            "title": "Канал по SMM",
            "shortDesc": "Тренды, шаблоны, разборы Reels — ежедневные материалы для роста в соцсетях.",
            "price": "1 500 ₽ / мес",
            "desc": (
                "Закрытый Telegram-канал с ежедневными разборами трендов, готовыми шаблонами "
                "контент-планов, примерами успешных Reels и Stories."
            ),
        },
        {
            "title": "Канал по маркетингу",
            "shortDesc": "Воронки, кейсы, стратегии привлечения — всё для роста бизнеса и продаж.",
            "price": "2 500 ₽ / мес",
            "desc": (
                "Закрытый канал для предпринимателей и маркетологов. Разборы воронок продаж, "
                "стратегии привлечения клиентов, анализ рекламных кампаний."
            ),
        },
        {
            "title": "Канал по нейросетям",
            "shortDesc": "Промпты, инструменты, автоматизация — AI для маркетинга и бизнеса.",
            "price": "2 000 ₽ / мес",
            "desc": (
                "Всё о применении AI в маркетинге и бизнесе: промпты для ChatGPT, Gemini, "
                "Midjourney, автоматизация рутины, генерация контента."
            ),
        },
    ],
}

# Top-level keys of the document that API clients may replace wholesale.
EDITABLE_SECTIONS = ("hero", "sections", "cta", "about", "services", "channels")


def default_content() -> dict:
    """Return a fresh deep copy of the seed document."""
    return copy.deepcopy(DEFAULT_CONTENT)
