"""URL configuration for the IPD app."""
from django.urls import path

from . import views

app_name = 'ipd'

urlpatterns = [
    path('engine/', views.EngineStatusView.as_view(), name='engine_status'),
    path('strategies/', views.StrategyListView.as_view(), name='strategy_list'),
    path('match/', views.GameView.as_view(), name='run_game'),
    path('tournament/', views.TournamentView.as_view(), name='run_tournament'),
    path('evolution/', views.EvolutionView.as_view(), name='run_evolution'),
]
