"""Pipeline stages: portions -> risk -> scheduler, plus the live adjustment stage."""
