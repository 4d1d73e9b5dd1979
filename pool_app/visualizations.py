"""Visualization utilities for pool state."""

import plotly.graph_objects as go
import plotly.express as px
import pandas as pd


def create_reserves_chart(options: pd.DataFrame, market: str):
    """Bar chart of option reserves."""
    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=[f"Option {i}" for i in options['option']],
        y=options['reserve'],
        name='Reserve',
        marker=dict(color='#4CAF50')
    ))

    fig.update_layout(
        title=f'Reserves: {market}',
        xaxis_title='Option',
        yaxis_title='Reserve',
        template='plotly_white',
        height=400
    )

    return fig


def create_probability_chart(options: pd.DataFrame, market: str):
    """Pie chart of implied outcome probabilities."""
    fig = px.pie(
        options,
        names=[f"Option {i}" for i in options['option']],
        values='probability',
        title=f'Implied Probabilities: {market}',
    )
    fig.update_layout(template='plotly_white', height=400)
    return fig


def create_trajectory_chart(trajectory: pd.DataFrame, market: str):
    """Line chart of every reserve across simulation steps."""
    fig = go.Figure()

    reserve_columns = [c for c in trajectory.columns if c.startswith('reserve_')]
    for column in reserve_columns:
        fig.add_trace(go.Scatter(
            x=trajectory['step'],
            y=trajectory[column],
            mode='lines',
            name=column.replace('reserve_', 'Option '),
        ))

    fig.update_layout(
        title=f'Reserves Over Time: {market}',
        xaxis_title='Step',
        yaxis_title='Reserve',
        hovermode='x unified',
        template='plotly_white',
        height=400
    )

    return fig


def create_share_chart(positions: pd.DataFrame, market: str):
    """Pie chart of LP share ownership."""
    fig = px.pie(
        positions[positions['shares'] > 0],
        names='provider',
        values='shares',
        title=f'LP Shares: {market}',
    )
    fig.update_layout(template='plotly_white', height=400)
    return fig
