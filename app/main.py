import sys
import os
import logging
import streamlit as st

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from shop_core.config import settings
from shop_core.logging_config import setup_logging
from shop_core.service import build_service
from shop_core.errors import SeedDataError
from Report_Service.report import exercise_report, order_rows


# ============ Кэширование данных ============
@st.cache_resource
def get_service():
    setup_logging(settings.log_level, settings.log_file)
    return build_service(settings.seed_path)


# ============ Инициализация ============
st.set_page_config(
    page_title="Stream Queries",
    page_icon="🔎",
    layout="wide",
    initial_sidebar_state="expanded",
)

try:
    service = get_service()
except (OSError, SeedDataError) as exc:
    st.error(f"❌ Не удалось загрузить данные: {exc}")
    st.stop()

report = exercise_report(service)


# ============ HEADER ============
st.title("🔎 Запросы к коллекциям: товары, заказы, клиенты")
st.caption(f"📂 seed: {settings.seed_path}")

# ============ SIDEBAR - Навигация ============
with st.sidebar:
    st.header("📂 Навигация")
    page = st.radio(
        "Выберите раздел:",
        ["📊 Overview", "❓ Запросы", "📝 Лог заказов за день"],
        label_visibility="collapsed",
    )


# ============ PAGE: OVERVIEW ============
if page == "📊 Overview":
    st.header("📦 Обзор данных")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("📦 Товары", len(service.product_repo))
    with col2:
        st.metric("👥 Клиенты", len(service.customer_repo))
    with col3:
        st.metric("🧾 Заказы", len(service.order_repo))

    st.divider()
    st.subheader("🧾 Все заказы")
    st.dataframe(order_rows(service.order_repo.find_all()), use_container_width=True)


# ============ PAGE: ЗАПРОСЫ ============
elif page == "❓ Запросы":
    st.header("❓ Бизнес-вопросы")

    question = st.selectbox("Вопрос:", list(report.keys()))
    rows = report[question]

    if not rows:
        st.info("Ничего не найдено")
    else:
        st.dataframe(rows, use_container_width=True)


# ============ PAGE: ЛОГ ============
elif page == "📝 Лог заказов за день":
    st.header("📝 Заказы за день")

    day = st.date_input("Выберите день:", value=None, key="log_day_input")
    if day and st.button("Показать", key="log_show"):
        matched = []
        products = service.orders_on_date_with_products(day, sink=matched.append)
        logging.getLogger(__name__).info("%d orders on %s", len(matched), day)

        st.subheader("🧾 Найденные заказы")
        st.dataframe(order_rows(matched), use_container_width=True)
        st.subheader("📦 Товары")
        st.write(", ".join(p.name for p in products) or "-")
