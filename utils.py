# utils.py
import folium
import pandas as pd
from folium.plugins import HeatMap

from geo import feature_name, color_scale
from population import max_weight

RING_COLORS = {'light_km': '#ffffff', 'major_km': '#ff9900', 'severe_km': '#ff2d2d'}


def kpi_dict(outcome):
    return {
        'pop': outcome.population,
        'deaths': outcome.deaths,
        'severe': outcome.radii.severe_km,
        'major': outcome.radii.major_km,
        'light': outcome.radii.light_km,
    }


def compare_dataframe(result):
    """Affected/Deaths rows with Base and Mitigated columns, for the bar chart."""
    return pd.DataFrame([
        {'name': 'Affected', 'Base': result.base.population, 'Mitigated': result.mitigated.population},
        {'name': 'Deaths', 'Base': result.base.deaths, 'Mitigated': result.mitigated.deaths},
    ]).set_index('name')


def distance_curve(radii, samples=20):
    """
    Normalized blast and thermal intensity vs distance, sampled at
    d = (i+1) * light / samples. Blast dies out at the severe radius, thermal
    (scaled to 0.6) at the light radius.
    """
    rows = []
    for i in range(samples):
        d = (i + 1) * (radii.light_km / samples)
        blast = max(0.0, 1 - d / radii.severe_km)
        thermal = max(0.0, 1 - d / radii.light_km) * 0.6
        rows.append({'d': round(d), 'blast': round(blast, 2), 'thermal': round(thermal, 2)})
    return pd.DataFrame(rows)


def snapshot_to_dataframe(snapshot):
    """
    One row per outcome (base / mitigated) of a saved scenario.
    """
    p = snapshot.parameters
    rows = []
    for kind, outcome in (('base', snapshot.base), ('mitigated', snapshot.mitigated)):
        row = {
            'scenario': snapshot.label,
            'outcome': kind,
            'asteroid': snapshot.asteroid_name,
            'diameter_m': p.diameter_m,
            'speed_kms': p.speed_kms,
            'angle_deg': p.angle_deg,
            'lat': p.impact.lat,
            'lng': p.impact.lng,
            'strategy': snapshot.mitigation.mode,
        }
        row.update(kpi_dict(outcome))
        rows.append(row)
    return pd.DataFrame(rows)


def create_folium_map(result, explosion_rings=(), countries=(), selected_country=None,
                      map_tiles='CartoDB dark_matter', popup=True):
    """
    Folium map with the mitigated damage rings, the exposure heatmap and any
    live explosion rings. Radii are km; folium circles take meters.
    """
    impact = result.parameters.impact
    m = folium.Map(location=[impact.lat, impact.lng], tiles=map_tiles, zoom_start=5)

    for feat in countries:
        name = feature_name(feat)
        selected = name == selected_country
        folium.GeoJson(feat,
                       style_function=lambda _, selected=selected: {
                           'color': '#6b7280', 'weight': 1,
                           'fillColor': '#22c55e' if selected else '#ffffff',
                           'fillOpacity': 0.55 if selected else 0.05},
                       tooltip=name).add_to(m)

    top = max_weight(result.exposure)
    heat = [[lat, lng, w / top] for lat, lng, w in result.exposure.heat_data()]
    gradient = {stop: color_scale(stop) for stop in (0.2, 0.4, 0.6, 0.8, 1.0)}
    HeatMap(heat, radius=12, blur=18, gradient=gradient, name='Exposure').add_to(m)

    base_light = result.base.radii.light_km
    if base_light != result.mitigated.radii.light_km:
        folium.Circle(location=[impact.lat, impact.lng], radius=base_light * 1000.0,
                      color='#9ca3af', dash_array='6', fill=False,
                      popup=f"unmitigated light: {base_light:.1f} km" if popup else None).add_to(m)

    # outermost first so the inner rings stay clickable
    for zone in ('light_km', 'major_km', 'severe_km'):
        radius_km = getattr(result.mitigated.radii, zone)
        folium.Circle(location=[impact.lat, impact.lng],
                      radius=radius_km * 1000.0,
                      color=RING_COLORS[zone],
                      fill=True,
                      fill_opacity=0.15,
                      popup=f"{zone[:-3]}: {radius_km:.1f} km" if popup else None).add_to(m)

    for ring in explosion_rings:
        folium.Circle(location=[ring['lat'], ring['lng']],
                      radius=ring['radius_km'] * 1000.0,
                      color=ring['color'],
                      weight=3,
                      fill=False,
                      popup=f"{ring['ring']} ring: {ring['radius_km']:.0f} km" if popup else None).add_to(m)

    folium.CircleMarker([impact.lat, impact.lng], radius=5, color='black', fill=True, fill_color='black',
                        popup="Impact Point" if popup else None).add_to(m)
    return m
