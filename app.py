# app.py
import logging

import pandas as pd
import streamlit as st
from streamlit_folium import st_folium

from config import (ASTEROID_NAME, ASTEROID_PRESETS, DEFAULT_SCENARIO, DEFAULT_DEFLECTION,
                    DEFAULT_EVACUATION, DEFAULT_EXPLOSION, SLIDERS)
from explosions import ExplosionManager, EXPLOSION_STYLES
from geo import load_countries, feature_centroid, feature_name, format_compact
from mitigation import mitigation_from_mode, describe
from scenario import ScenarioEngine, SnapshotStore
from simulation import Coordinate, ScenarioParameters
from utils import compare_dataframe, distance_curve, snapshot_to_dataframe, create_folium_map

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

# APP CONFIG
st.set_page_config(page_title=f"{ASTEROID_NAME} Dashboard", layout="wide", initial_sidebar_state="expanded")


@st.cache_data(show_spinner=False)
def cached_countries():
    return load_countries()


def slider(label, key, default, fmt=None):
    r = SLIDERS[key]
    # keys already in session state (presets, previous run) carry the value
    kwargs = {} if key in st.session_state else {"value": float(default)}
    return st.slider(label, min_value=float(r.min_value), max_value=float(r.max_value),
                     step=float(r.step), key=key, format=fmt, **kwargs)


# --- Session state: engine, snapshots, explosions survive reruns ---
ss = st.session_state
if 'engine' not in ss:
    ss.engine = ScenarioEngine()
    ss.snapshots = SnapshotStore()
    ss.explosions = ExplosionManager()
    ss.impact = Coordinate(DEFAULT_SCENARIO['lat'], DEFAULT_SCENARIO['lng'])
    ss.selected_country = None
    for k in ('diameter_m', 'speed_kms', 'angle_deg'):
        ss[k] = float(DEFAULT_SCENARIO[k])

countries = cached_countries()

# --- Sidebar: scenario / explosion / mitigation / A-B ---
with st.sidebar:
    st.title(f"{ASTEROID_NAME} Dashboard")
    st.caption("Toy model; replace with real data/models.")

    if st.button("Start Simulation", type="primary"):
        preset = ASTEROID_PRESETS.get(ASTEROID_NAME)
        if preset:
            for k, v in preset.items():
                ss[k] = float(v)
        ss.explosions.trigger(ss.impact, DEFAULT_EXPLOSION['diameter_km'], DEFAULT_EXPLOSION['kind'])

    st.subheader("Scenario")
    diameter = slider("Diameter (m)", 'diameter_m', ss.diameter_m)
    speed = slider("Speed (km/s)", 'speed_kms', ss.speed_kms)
    angle = slider("Angle (degrees)", 'angle_deg', ss.angle_deg)

    names = sorted(feature_name(f) for f in countries)
    if names:
        choice = st.selectbox("Country", ["(click the map)"] + names)
        if choice in names and choice != ss.get("last_choice"):
            feat = next(f for f in countries if feature_name(f) == choice)
            ss.selected_country = choice
            ss.impact = feature_centroid(feat)
        ss.last_choice = choice
    st.write(f"**Impact location:** lat {ss.impact.lat:.3f}, lng {ss.impact.lng:.3f}")

    st.markdown("---")
    st.subheader("Explosion")
    explosion_kind = st.radio("Type", list(EXPLOSION_STYLES), horizontal=True)
    r = SLIDERS['explosion_diameter_km']
    explosion_diameter = st.slider("Explosion diameter (km)", min_value=float(r.min_value),
                                   max_value=float(r.max_value), step=float(r.step),
                                   value=float(DEFAULT_EXPLOSION['diameter_km']))
    if st.button("Trigger Explosion"):
        ss.explosions.trigger(ss.impact, explosion_diameter, explosion_kind)
    st.caption("Visual-only rings (shock & thermal).")

    st.markdown("---")
    st.subheader("Mitigation")
    strategy = st.radio("Strategy", ["none", "deflection", "evacuation"], horizontal=True)
    if strategy == "deflection":
        delta_v = slider("Δv (mm/s)", 'delta_v_mm_s', DEFAULT_DEFLECTION['delta_v_mm_s'])
        lead = slider("Lead time (years)", 'lead_years', DEFAULT_DEFLECTION['lead_years'])
        mitigation = mitigation_from_mode(strategy, delta_v_mm_s=delta_v, lead_years=lead)
        st.caption("Note: uses a simple reduction factor (demo).")
    elif strategy == "evacuation":
        evac_r = slider("Evacuation radius (km)", 'evac_radius_km', DEFAULT_EVACUATION['radius_km'])
        evac_c = slider("Coverage (%)", 'evac_coverage_pct', DEFAULT_EVACUATION['coverage_pct'])
        mitigation = mitigation_from_mode(strategy, evac_radius_km=evac_r, evac_coverage_pct=evac_c)
        st.caption("Note: assumes 70% of losses occur in the severe zone.")
    else:
        mitigation = mitigation_from_mode(strategy)

# --- Recompute ---
params = ScenarioParameters(diameter_m=diameter, speed_kms=speed, angle_deg=angle, impact=ss.impact)
result = ss.engine.evaluate(params, mitigation)
ss.explosions.sweep()

with st.sidebar:
    st.markdown("---")
    st.subheader("Show Difference")
    a_col, b_col = st.columns(2)
    if a_col.button("Save A"):
        ss.snapshots.save("A", result)
    if b_col.button("Save B"):
        ss.snapshots.save("B", result)
    for label in ("A", "B"):
        snap = ss.snapshots.get(label)
        if snap:
            st.write(f"{label}: {snap.asteroid_name} • deaths {snap.mitigated.deaths:,}")
    delta = ss.snapshots.delta()
    if delta:
        st.markdown("**Δ (B − A)**")
        st.write(f"Deaths: {delta.deaths:+,}")
        st.write(f"Affected: {delta.population:+,}")
        st.write(f"Radii (km): severe {delta.severe_km:+.1f}, major {delta.major_km:+.1f}, "
                 f"light {delta.light_km:+.1f}")

# --- Main layout ---
st.header(f"{ASTEROID_NAME} — impact scenario explorer")

c1, c2, c3, c4 = st.columns(4)
c1.metric("Energy (megatons TNT)", f"{result.energy_megatons:.3g}")
c2.metric("Severe radius (km)", f"{result.mitigated.radii.severe_km:.1f}",
          delta=f"{result.mitigated.radii.severe_km - result.base.radii.severe_km:.1f}", delta_color="inverse")
c3.metric("Affected population", format_compact(result.mitigated.population),
          delta=format_compact(result.mitigated.population - result.base.population), delta_color="inverse")
c4.metric("Estimated deaths", format_compact(result.mitigated.deaths),
          delta=format_compact(result.mitigated.deaths - result.base.deaths), delta_color="inverse")
st.caption(f"Mitigation: {describe(result.mitigation)}")

map_col, chart_col = st.columns([3, 2])
with map_col:
    fmap = create_folium_map(result, explosion_rings=ss.explosions.rings(), countries=countries,
                             selected_country=ss.selected_country)
    clicked = st_folium(fmap, height=520, use_container_width=True, returned_objects=['last_clicked'])
    last = (clicked or {}).get('last_clicked')
    if last and last != ss.get('last_click'):
        ss.last_click = last
        point = Coordinate(last['lat'], last['lng'])
        if point != ss.impact:
            ss.impact = point
            ss.selected_country = None
            st.rerun()

with chart_col:
    st.write("Affected vs deaths")
    st.bar_chart(compare_dataframe(result))
    st.write("Intensity vs distance (km)")
    st.line_chart(distance_curve(result.base.radii).set_index('d'))

saved = [ss.snapshots.get(label) for label in ("A", "B")]
saved = [s for s in saved if s is not None]
if saved:
    st.markdown("### Saved scenarios")
    st.dataframe(pd.concat([snapshot_to_dataframe(s) for s in saved], ignore_index=True))

with st.expander("Assumptions"):
    st.markdown("""
- Synthetic population density — replace with real WorldPop/USGS data.
- Simple scaling: diameter^3 · speed^2 · sin(angle).
- Evacuation reduces losses in the severe zone.
- Deflection applies reduction based on Δv and lead time.
""")
