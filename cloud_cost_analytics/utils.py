"""
Shared utility functions for Cloud Cost Analytics
"""

SERVICE_ABBREVIATIONS = [
    ("Elastic Compute Cloud", "EC2"),
    ("Relational Database Service", "RDS"),
    ("Simple Storage Service", "S3"),
    ("Elastic Kubernetes Service", "EKS"),
    ("Azure Kubernetes Service", "AKS"),
    ("Google Kubernetes Engine", "GKE"),
    ("Virtual Machines", "VMs"),
    ("Compute Engine", "GCE"),
    ("Cloud Storage", "GCS"),
]
PROVIDER_PREFIXES = ("Amazon ", "AWS ", "Azure ", "Microsoft ", "Google ")


def clean_service_name(service_name, max_length=16):
    """Clean and abbreviate cloud service names for report columns"""
    name = str(service_name)

    for full, short in SERVICE_ABBREVIATIONS:
        name = name.replace(full, short)

    # Remove redundant provider prefixes
    for prefix in PROVIDER_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix) :]

    # Truncate if still too long, but keep it readable
    if len(name) > max_length:
        name = name[: max_length - 3] + "..."

    return name
