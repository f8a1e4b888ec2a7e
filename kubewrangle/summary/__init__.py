"""State summaries and relationships of Kubernetes-style objects."""