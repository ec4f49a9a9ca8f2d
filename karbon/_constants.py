# SPDX-FileCopyrightText: Copyright (c) 2024-2026, kubectl-karbon Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License

DEFAULT_PORT = 9440
DEFAULT_TIMEOUT = 30

CLUSTER_LIST_URL = "/karbon/v1-beta.1/k8s/clusters"
KUBECONFIG_URL = "/karbon/v1/k8s/clusters/{cluster}/kubeconfig"
SSH_URL = "/karbon/v1/k8s/clusters/{cluster}/ssh"

PASSWORD_ENV = "KARBON_PASSWORD"
KEYRING_SERVICE = "kubectl-karbon {server}"

SSH_KEY_COMMENT = "karbon cluster {cluster}"
DEFAULT_KUBECONFIG = "~/.kube/config"
DEFAULT_KUBIE_PATH = "~/.kube/kubie/"
DEFAULT_SSH_DIR = "~/.ssh"
