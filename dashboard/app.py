"""
Streamlit Dashboard for the Flood Risk Platform

Interactive dashboard for visualizing flood risk assessments.
"""

import streamlit as st
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import sys
import os

# Add src directory to path
sys.path.append(os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from api_connectors import (
    OpenMeteoGeocodingConnector,
    OpenMeteoWeatherConnector,
    OpenMeteoFloodConnector,
)
from risk_scoring import (
    RiskLevel,
    RiskScorer,
    build_discharge_chart_data,
    build_rain_chart_data,
    level_label,
)
from risk_scoring.localization import chart_text

# Page configuration
st.set_page_config(
    page_title="Flood Risk Platform",
    page_icon="🌊",
    layout="wide",
    initial_sidebar_state="expanded"
)

LEVEL_COLORS = {
    RiskLevel.LOW: "#22c55e",
    RiskLevel.MODERATE: "#facc15",
    RiskLevel.HIGH: "#f97316",
    RiskLevel.CRITICAL: "#dc2626",
}

LANGUAGES = {"English": "en", "Português": "pt", "Español": "es"}

QUICK_LOCATIONS = [
    ("Porto Alegre", "Brazil"),
    ("Valencia", "Spain"),
    ("Dhaka", "Bangladesh"),
    ("New Orleans", "United States"),
]


def set_location(city, country):
    # Runs before the rerun, so the keyed text inputs pick up the new values
    st.session_state.city = city
    st.session_state.country = country


# Initialize connectors
@st.cache_resource
def get_connectors():
    return {
        "geocoding": OpenMeteoGeocodingConnector(),
        "weather": OpenMeteoWeatherConnector(),
        "flood": OpenMeteoFloodConnector(),
        "scorer": RiskScorer()
    }

connectors = get_connectors()

# Title and description
st.title("🌊 Flood Risk Intelligence Platform")
st.markdown("**Rainfall, Soil Moisture and River Discharge Risk Assessment**")

# Sidebar
st.sidebar.header("Configuration")

language = LANGUAGES[st.sidebar.radio("Language", list(LANGUAGES.keys()), horizontal=True)]

# Location input
st.sidebar.subheader("📍 Location")
if "city" not in st.session_state:
    set_location(*QUICK_LOCATIONS[0])
city = st.sidebar.text_input("City", key="city")
country = st.sidebar.text_input("Country (optional)", key="country")

# Quick location buttons
st.sidebar.subheader(" Quick Locations")
columns = st.sidebar.columns(2)
for i, (quick_city, quick_country) in enumerate(QUICK_LOCATIONS):
    columns[i % 2].button(
        quick_city,
        key=f"quick_{i}",
        on_click=set_location,
        args=(quick_city, quick_country)
    )

# Analysis button
if st.sidebar.button(" Analyze Risk", type="primary"):
    with st.spinner("Fetching data from Open-Meteo..."):
        try:
            location = connectors["geocoding"].geocode_location(city, country or None, language=language)
        except Exception as e:
            location = None
            st.error(f"Geocoding service unavailable: {e}")

        if location is None:
            st.session_state.analysis_complete = False
            st.warning(f"Could not find location \"{city}\".")
        else:
            weather = connectors["weather"].get_hourly_weather(location["latitude"], location["longitude"])
            flood = connectors["flood"].get_river_discharge(location["latitude"], location["longitude"])

            if weather is None:
                st.session_state.analysis_complete = False
                st.error("Weather data service unavailable.")
            else:
                # Store in session state
                st.session_state.location = location
                st.session_state.weather = weather
                st.session_state.flood = flood
                st.session_state.analysis_complete = True

# Main content
if st.session_state.get("analysis_complete", False):
    location = st.session_state.location
    weather = st.session_state.weather
    flood = st.session_state.flood

    # Rescored on every rerun so a language switch updates the text
    analysis = connectors["scorer"].calculate_flood_risk(weather, flood, language=language)

    st.subheader(f"📍 {location['name']}, {location.get('country', '')}")

    # Risk Score Cards
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        fig = go.Figure(go.Indicator(
            mode="gauge+number",
            value=analysis.score,
            title={"text": level_label(analysis.level, language)},
            gauge={
                "axis": {"range": [0, 100]},
                "bar": {"color": LEVEL_COLORS[analysis.level]},
                "steps": [
                    {"range": [0, 25], "color": "#f0fdf4"},
                    {"range": [25, 50], "color": "#fefce8"},
                    {"range": [50, 75], "color": "#fff7ed"},
                    {"range": [75, 100], "color": "#fef2f2"},
                ],
            },
        ))
        fig.update_layout(height=220, margin=dict(t=40, b=0, l=20, r=20))
        st.plotly_chart(fig, use_container_width=True)

    with col2:
        st.metric(label="Rain next 24h", value=f"{analysis.forecast_precip_24h:.1f} mm")
        st.metric(label="Rain next 72h", value=f"{analysis.forecast_precip_72h:.1f} mm")

    with col3:
        st.metric(label="Rain last 7 days", value=f"{analysis.recent_precip_total:.1f} mm")
        st.metric(label="Soil saturation", value=f"{analysis.current_soil_saturation * 100:.0f}% vol")

    with col4:
        if analysis.river_discharge_current is not None:
            st.metric(label="River discharge", value=f"{analysis.river_discharge_current:.1f} m³/s")
        else:
            st.metric(label="River discharge", value="No gauge")
        if analysis.river_discharge_median is not None:
            st.metric(label="Historical median", value=f"{analysis.river_discharge_median:.1f} m³/s")

    # Risk Level Indicator
    label = level_label(analysis.level, language)
    if analysis.level == RiskLevel.CRITICAL:
        st.error(f"⚠️ **{label}** - Immediate action required")
    elif analysis.level == RiskLevel.HIGH:
        st.warning(f"⚠️ **{label}** - Prepare for flooding")
    elif analysis.level == RiskLevel.MODERATE:
        st.info(f"ℹ️ **{label}** - Stay alert")
    else:
        st.success(f"✅ **{label}** - Minimal concern")

    st.markdown("---")

    tab1, tab2, tab3 = st.tabs(["🌧️ Rainfall", "📋 Preparedness", "🌊 River"])

    with tab1:
        chart = build_rain_chart_data(weather, language=language)

        if not chart.empty:
            chart["period"] = chart["is_forecast"].map({
                True: chart_text("forecast", language),
                False: chart_text("observed", language),
            })
            fig = px.bar(
                chart,
                x="timestamp",
                y="precipitation",
                color="period",
                labels={"timestamp": "", "precipitation": "mm/h", "period": ""},
                title="Hourly Precipitation",
            )
            now_rows = chart[chart["label"] == chart_text("now", language)]
            if not now_rows.empty:
                fig.add_vline(x=now_rows["timestamp"].iloc[0], line_dash="dash")
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.info("No hourly precipitation data available.")

        st.subheader("Contributing Factors")
        for factor in analysis.factors:
            st.markdown(f"- {factor}")

        st.subheader("Score Breakdown")
        breakdown = pd.DataFrame([c.model_dump() for c in analysis.contributions])
        st.dataframe(breakdown, use_container_width=True)

    with tab2:
        st.subheader("Recommendations")
        for i, recommendation in enumerate(analysis.recommendations):
            st.checkbox(recommendation, key=f"rec_{analysis.level.value}_{i}")

    with tab3:
        st.subheader("River Discharge")
        discharge = build_discharge_chart_data(flood)
        if not discharge.empty:
            fig = px.line(
                discharge,
                x="date",
                y=["discharge", "median"],
                labels={"value": "m³/s", "date": "", "variable": ""},
                title="Daily River Discharge vs. Historical Median",
            )
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.success("No river gauge near this location.")

else:
    # Instructions
    st.info("👈 Enter a city in the sidebar and click **Analyze Risk** to begin.")

    st.markdown("""
    ### About This Platform

    This platform estimates flood risk for any city by combining data from:

    - **Open-Meteo Forecast**: past and forecast hourly precipitation, precipitation probability and soil moisture
    - **Open-Meteo Flood (GloFAS)**: daily river discharge and its historical median

    The 0-100 score weighs soil saturation, recent rain, the 24h and 72h outlook, rain intensity
    and river anomalies. Rivers running far above their median raise the alert even under clear skies.

    ### How to Use

    1. Enter a city (and optionally a country), or use a quick location button
    2. Choose the output language
    3. Click "Analyze Risk" to fetch data and calculate the score
    4. Review rainfall, preparedness steps and river data in each tab
    """)

# Footer
st.sidebar.markdown("---")
st.sidebar.markdown("""
**Flood Risk Platform**
Version 1.0.0
Data Sources: Open-Meteo, GloFAS
""")
