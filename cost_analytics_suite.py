#!/usr/bin/env python3
"""
Cloud Cost Analytics
Runs forecasting, trend, anomaly and comparison analysis over usage records

USAGE EXAMPLES:
  ./cost_analytics_suite.py --csv data/usage.csv                  # All teams
  ./cost_analytics_suite.py --csv data/usage.csv --team payments  # One team
  ./cost_analytics_suite.py --days 30 --method seasonal --horizon 14
  ./cost_analytics_suite.py --compare services --metric efficiency
"""

import sys

from cloud_cost_analytics.cli import main

if __name__ == "__main__":
    sys.exit(main())
